# quantalogic_scopes/scope.py
import itertools
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

import psutil

from .exceptions import ScopeUnderflowError
from .slot import BaseSlot
from .values import Class, Func

logger = logging.getLogger(__name__)


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return frozenset((k, _freeze(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    return value


class Scope:
    """A map from variable names to variable slots."""

    def __init__(self, values: Optional[Dict[str, BaseSlot]] = None) -> None:
        self.values: Dict[str, BaseSlot] = dict(values or {})

    def define_const(self, name: str, value: Any) -> None:
        self.values[name] = BaseSlot.constant(value)

    def define_mut(self, name: str, value: Any) -> None:
        self.values[name] = BaseSlot.mutable(value)

    def define_slot(self, name: str, slot: BaseSlot) -> None:
        self.values[name] = slot

    def define_func(self, name: str, func: Callable) -> None:
        self.define_const(name, Func(name, func))

    def define_class(self, name: str, cls: type) -> None:
        self.define_const(name, Class(name, cls))

    def lookup(self, name: str) -> Optional[BaseSlot]:
        return self.values.get(name)

    def enumerate(self) -> Iterator[Tuple[str, BaseSlot]]:
        for name in sorted(self.values):
            yield name, self.values[name]

    def names(self) -> List[str]:
        return sorted(self.values)

    def copy(self) -> "Scope":
        """Shallow copy: the new scope binds the same slots."""
        return Scope(self.values)

    def __iter__(self) -> Iterator[Tuple[str, BaseSlot]]:
        return self.enumerate()

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def _items(self) -> Tuple[Tuple[str, Any], ...]:
        return tuple((name, slot.get()) for name, slot in self.enumerate())

    def __eq__(self, other):
        if not isinstance(other, Scope):
            return NotImplemented
        return self._items() == other._items()

    def __hash__(self):
        return hash((len(self.values),) + tuple((name, _freeze(value)) for name, value in self._items()))

    def __repr__(self) -> str:
        entries = ', '.join(f"{name}: {value!r}" for name, value in self._items())
        return "Scope {" + entries + "}"


class ScopeStack:
    """The active scope, the suspended outer scopes and an optional base.

    Lookups walk from the active scope through the suspended ones, innermost
    first, and finally consult the base. Definitions only ever go to the
    active scope; the base is never written.
    """

    def __init__(self, base: Optional[Scope] = None, max_depth: int = 1000,
                 max_memory_mb: Optional[int] = None) -> None:
        self.top: Scope = Scope()
        self.scopes: List[Scope] = []
        self.base: Optional[Scope] = base
        self.max_depth: int = max_depth
        self.max_memory_mb: Optional[int] = max_memory_mb
        self.process = psutil.Process() if max_memory_mb is not None else None

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def enter(self) -> None:
        if len(self.scopes) >= self.max_depth:
            raise RecursionError("Maximum scope depth exceeded (%d)" % self.max_depth)
        if self.process is not None:
            memory_usage = self.process.memory_info().rss / 1024 / 1024
            if memory_usage > self.max_memory_mb:
                raise MemoryError("Memory usage exceeded limit (%d MB)" % self.max_memory_mb)
        self.scopes.append(self.top)
        self.top = Scope()
        logger.debug("Entered scope at depth %d", len(self.scopes))

    def exit(self) -> None:
        """Exit the topmost scope.

        Raises ScopeUnderflowError if no scope was entered.
        """
        if not self.scopes:
            raise ScopeUnderflowError()
        self.top = self.scopes.pop()
        logger.debug("Exited scope, back to depth %d", len(self.scopes))

    @contextmanager
    def block(self) -> Iterator[Scope]:
        self.enter()
        try:
            yield self.top
        finally:
            self.exit()

    def define_const(self, name: str, value: Any) -> None:
        logger.debug("Defining constant '%s' at depth %d", name, len(self.scopes))
        self.top.define_const(name, value)

    def define_mut(self, name: str, value: Any) -> None:
        logger.debug("Defining variable '%s' at depth %d", name, len(self.scopes))
        self.top.define_mut(name, value)

    def define_slot(self, name: str, slot: BaseSlot) -> None:
        logger.debug("Binding slot '%s' at depth %d", name, len(self.scopes))
        self.top.define_slot(name, slot)

    def _chain(self) -> Iterable[Scope]:
        base = [self.base] if self.base is not None else []
        return itertools.chain([self.top], reversed(self.scopes), base)

    def lookup(self, name: str) -> Optional[BaseSlot]:
        for scope in self._chain():
            slot = scope.lookup(name)
            if slot is not None:
                return slot
        return None

    def get(self, name: str) -> Any:
        slot = self.lookup(name)
        if slot is None:
            raise NameError("Name '%s' is not defined." % name)
        return slot.get()

    def assign(self, name: str, value: Any) -> None:
        slot = self.lookup(name)
        if slot is None:
            raise NameError("Name '%s' is not defined." % name)
        slot.set(value)

    def capture(self, names: Iterable[str]) -> Scope:
        """Build a closure scope that shares the resolved slot of each name."""
        captured = Scope()
        for name in names:
            slot = self.lookup(name)
            if slot is not None:
                captured.define_slot(name, slot)
        return captured

    def visible(self) -> List[Tuple[str, BaseSlot]]:
        seen: Dict[str, BaseSlot] = {}
        for scope in self._chain():
            for name, slot in scope.enumerate():
                seen.setdefault(name, slot)
        return sorted(seen.items())
