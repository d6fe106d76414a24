"""
Object heap with manual reference counting.

Objects live at caller-chosen integer addresses. The heap never allocates an
address itself and never frees anything on its own: every store site calls
`increment`, every removal site calls `decrement`, and collection only happens
when the host asks for it through `collect`.

Counting policy:
1. Storing a value into an object field increments it
2. Deleting an object decrements each of its field values once
3. Overwriting a field does NOT decrement the previous value
4. Only object references are counted; other values are ignored

Releasing a reference that was never counted is logged, or raises
HeapCorruption when the heap is strict.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from .errors import FieldNotFound, HeapCorruption, ObjectExists, ObjectNotFound
from .object import ObjectRef, Value

logger = logging.getLogger(__name__)


class GcApproach(Enum):
    """How `ObjectHeap.collect` reclaims objects"""
    NONE = "none"
    REFERENCE_COUNTING = "refcount"

    @classmethod
    def parse(cls, text: str) -> "GcApproach":
        for approach in cls:
            if approach.value == text or approach.name.lower() == text.lower():
                return approach
        raise ValueError(f"Unknown gc approach: {text!r}")


# A host may also pass its own callable; it receives the executor.
CollectPolicy = Union[GcApproach, Callable[[Any], Any], None]


class Object:
    """Named-field record stored on the heap"""

    def __init__(self, fields: Optional[Dict[str, Value]] = None):
        self.fields = dict(fields or {})

    def __repr__(self):
        inner = ", ".join(f"{name}: {value.inspect()}" for name, value in self.fields.items())
        return f"Object {{{inner}}}"


class ObjectHeap:
    def __init__(self, strict: bool = False):
        self.strict = strict
        self.objects: Dict[int, Object] = {}
        # address -> use count, only for addresses something has referenced
        self.use_counts: Dict[int, int] = {}
        self.stats = {
            "created": 0,
            "deleted": 0,
            "collected": 0,
            "field_writes": 0,
        }

    def __contains__(self, address):
        return address in self.objects

    def __len__(self):
        return len(self.objects)

    # ---- Reference counting -------------------------------------------------------

    def increment(self, value: Value):
        if not isinstance(value, ObjectRef):
            return
        self.use_counts[value.value] = self.use_counts.get(value.value, 0) + 1

    def decrement(self, value: Value):
        if not isinstance(value, ObjectRef):
            return
        address = value.value
        count = self.use_counts.get(address, 0)
        if count <= 0:
            # Global assignment does not count, so unassigning a variable can
            # release a reference that was never taken.
            message = f"Use count for {address} released but never taken"
            if self.strict:
                raise HeapCorruption(message)
            logger.warning(message)
            return
        self.use_counts[address] = count - 1

    def use_count(self, address: int) -> int:
        return self.use_counts.get(address, 0)

    # ---- Object lifecycle ---------------------------------------------------------

    def create(self, address: int, fields: Iterable[Tuple[str, Value]]) -> Object:
        """Insert a new object at `address`.

        `fields` are already-evaluated (name, value) pairs. Each value is
        counted as it is stored. Fails if the address is occupied.
        """
        if address in self.objects:
            raise ObjectExists(address)

        stored = {}
        for name, value in fields:
            self.increment(value)
            stored[name] = value

        obj = Object(stored)
        self.objects[address] = obj
        self.stats["created"] += 1
        logger.debug("created object at %s with %d fields", address, len(stored))
        return obj

    def delete(self, address: int) -> bool:
        """Remove the object at `address`; absent addresses are ignored"""
        obj = self.objects.pop(address, None)
        if obj is None:
            return False

        for value in obj.fields.values():
            self.decrement(value)
        self.stats["deleted"] += 1
        logger.debug("deleted object at %s", address)
        return True

    def resolve(self, address: int) -> Object:
        try:
            return self.objects[address]
        except KeyError:
            raise ObjectNotFound(address) from None

    def get_field(self, address: int, name: str) -> Value:
        obj = self.resolve(address)
        try:
            return obj.fields[name]
        except KeyError:
            raise FieldNotFound(address, name) from None

    def set_field(self, address: int, name: str, value: Value):
        obj = self.resolve(address)
        # the previous value keeps its count
        self.increment(value)
        obj.fields[name] = value
        self.stats["field_writes"] += 1

    # ---- Collection ---------------------------------------------------------------

    def collect(self, approach: CollectPolicy, executor=None) -> List[int]:
        """Run one collection pass and return the addresses it removed"""
        if approach is None or approach is GcApproach.NONE:
            return []

        if approach is GcApproach.REFERENCE_COUNTING:
            return self._collect_unreferenced()

        if callable(approach):
            result = approach(executor)
            return list(result or [])

        raise ValueError(f"Unknown gc approach: {approach!r}")

    def _collect_unreferenced(self) -> List[int]:
        # Only objects that were referenced at some point and dropped to zero
        # are reclaimed; never-referenced objects are left for the host.
        removed = []
        while True:
            dead = [
                address for address, count in self.use_counts.items()
                if count == 0 and address in self.objects
            ]
            if not dead:
                break
            for address in dead:
                self.delete(address)
                del self.use_counts[address]
                removed.append(address)

        self.stats["collected"] += len(removed)
        if removed:
            logger.debug("collected %d objects: %s", len(removed), removed)
        return removed

    def leaks(self) -> List[Tuple[int, Object]]:
        """Objects still alive, for the end-of-run report"""
        return sorted(self.objects.items())
