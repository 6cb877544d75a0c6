# quantalogic_scopes/slot.py
"""
Storage cells for variables.

A slot holds exactly one value and is shared by reference: every scope or
closure that binds the same slot reads and writes the same storage.
"""

import logging
import threading
from typing import Any, Callable

from .exceptions import ConstantWriteError

logger = logging.getLogger(__name__)


class BaseSlot:
    """Read access shared by mutable and constant slots."""
    __slots__ = ('_value',)

    def __init__(self, value: Any = None) -> None:
        self._value: Any = value

    @classmethod
    def mutable(cls, value: Any) -> "Slot":
        return Slot(value)

    @classmethod
    def constant(cls, value: Any) -> "ConstSlot":
        return ConstSlot(value)

    @property
    def is_const(self) -> bool:
        raise NotImplementedError

    @property
    def value(self) -> Any:
        return self._value

    def get(self) -> Any:
        return self._value


class Slot(BaseSlot):
    __slots__ = ('_lock',)

    def __init__(self, value: Any = None) -> None:
        super().__init__(value)
        self._lock = threading.RLock()

    @property
    def is_const(self) -> bool:
        return False

    def set(self, value: Any) -> None:
        with self._lock:
            self._value = value

    def update(self, fn: Callable[[Any], Any]) -> Any:
        """Replace the value with ``fn(old)`` while holding the cell's lock.

        The lock is reentrant, so ``fn`` may itself read or write this slot;
        its result still becomes the new value.
        """
        with self._lock:
            self._value = fn(self._value)
            return self._value

    def __repr__(self) -> str:
        return f"Slot({self._value!r})"


class ConstSlot(BaseSlot):
    """A slot with no write path.

    Constness belongs to the cell, not to the name it is bound under, so a
    constant slot stays read-only when it is aliased into another scope or
    captured by a closure.
    """
    __slots__ = ()

    @property
    def is_const(self) -> bool:
        return True

    def set(self, value: Any) -> None:
        logger.debug("Rejected write of %r to constant slot", value)
        raise ConstantWriteError(value)

    def update(self, fn: Callable[[Any], Any]) -> Any:
        logger.debug("Rejected update of constant slot holding %r", self._value)
        raise ConstantWriteError(self._value)

    def __repr__(self) -> str:
        return f"ConstSlot({self._value!r})"
