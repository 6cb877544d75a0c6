# quantalogic_scopes/values.py
"""
Value-side collaborators of the scope model: the native calling convention
(Args, EvalContext) and the wrappers that native registrations are stored as
(Func for callables, Class for types supporting Construct and Set).
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence

from .exceptions import EvalError

if TYPE_CHECKING:
    from .scope import ScopeStack


class Args:
    """Arguments passed to a native function, consumed as they are read."""

    def __init__(self, positional: Sequence[Any] = (), named: Optional[Dict[str, Any]] = None) -> None:
        self.positional: List[Any] = list(positional)
        self.named_args: Dict[str, Any] = dict(named or {})

    def eat(self) -> Any:
        if self.positional:
            return self.positional.pop(0)
        return None

    def expect(self, what: str) -> Any:
        if not self.positional:
            raise EvalError(f"missing argument: {what}")
        return self.positional.pop(0)

    def named(self, name: str, default: Any = None) -> Any:
        return self.named_args.pop(name, default)

    def finish(self) -> None:
        if self.positional:
            raise EvalError("unexpected argument")
        for name in self.named_args:
            raise EvalError(f"unexpected argument: {name}")

    def __repr__(self) -> str:
        return f"Args({self.positional!r}, {self.named_args!r})"


class EvalContext:
    def __init__(self, scopes: "ScopeStack", styles: Optional[Dict[str, Dict[str, Any]]] = None,
                 output: Optional[List[str]] = None) -> None:
        self.scopes = scopes
        self.styles: Dict[str, Dict[str, Any]] = styles if styles is not None else {}
        self.output: List[str] = output if output is not None else []


NativeFunc = Callable[[EvalContext, Args], Any]


class Func:
    """A named native function stored as a value."""

    def __init__(self, name: str, native: NativeFunc) -> None:
        self.name = name
        self.native = native

    def call(self, ctx: EvalContext, args: Args) -> Any:
        result = self.native(ctx, args)
        args.finish()
        return result

    def __eq__(self, other):
        if not isinstance(other, Func):
            return NotImplemented
        return self.name == other.name and self.native is other.native

    def __hash__(self):
        return hash((self.name, id(self.native)))

    def __repr__(self) -> str:
        return f"<function {self.name}>"


class Construct(ABC):
    @classmethod
    @abstractmethod
    def construct(cls, ctx: EvalContext, args: Args) -> Any:
        """Build an instance from call arguments."""


class Set(ABC):
    @classmethod
    @abstractmethod
    def set(cls, ctx: EvalContext, args: Args) -> None:
        """Record style defaults for later constructions."""


class Class:
    """A type descriptor for a class that can be both constructed and set."""

    def __init__(self, name: str, cls: type) -> None:
        if not (isinstance(cls, type) and issubclass(cls, Construct) and issubclass(cls, Set)):
            raise TypeError(f"Class '{name}' must implement both Construct and Set")
        self.name = name
        self.cls = cls

    def construct(self, ctx: EvalContext, args: Args) -> Any:
        value = self.cls.construct(ctx, args)
        args.finish()
        return value

    def set(self, ctx: EvalContext, args: Args) -> None:
        self.cls.set(ctx, args)
        args.finish()

    def __eq__(self, other):
        if not isinstance(other, Class):
            return NotImplemented
        return self.name == other.name and self.cls is other.cls

    def __hash__(self):
        return hash((self.name, self.cls))

    def __repr__(self) -> str:
        return f"<class {self.name}>"
