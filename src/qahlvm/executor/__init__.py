# src/qahlvm/executor/__init__.py
from .core import Executor, run

__all__ = ['Executor', 'run']
