# environment.py
import logging

from .errors import VariableNotFound

logger = logging.getLogger(__name__)


class Environment:
    """Flat global variable store: name -> Value.

    Use counts are not touched here; the executor decides which removals
    release a heap reference.
    """

    def __init__(self):
        self.store = {}

    # ---- Mapping protocol helpers -------------------------------------------------

    def __contains__(self, name):
        return name in self.store

    def __getitem__(self, name):
        return self.get(name)

    def __iter__(self):
        return iter(self.store)

    def __len__(self):
        return len(self.store)

    def keys(self):
        return self.store.keys()

    def items(self):
        return self.store.items()

    def values(self):
        return self.store.values()

    def copy(self):
        return dict(self.store)

    # ---- Core environment operations ---------------------------------------------

    def get(self, name):
        """Read a variable, failing if it was never bound or was unassigned"""
        try:
            return self.store[name]
        except KeyError:
            raise VariableNotFound(name) from None

    def lookup(self, name, default=None):
        return self.store.get(name, default)

    def assign(self, name, value):
        """Bind `name`, overwriting any previous binding.

        Returns True when the name did not exist before, so the host can track
        newly declared globals.
        """
        created = name not in self.store
        self.store[name] = value
        logger.debug("assign %s = %r (new=%s)", name, value, created)
        return created

    def unassign(self, name):
        """Remove the binding and hand back the value it held"""
        try:
            value = self.store.pop(name)
        except KeyError:
            raise VariableNotFound(name) from None
        logger.debug("unassign %s (was %r)", name, value)
        return value
