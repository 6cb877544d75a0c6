# quantalogic_scopes/library.py
"""
The standard base scope: native functions and classes every evaluation can
see. Everything here is defined constant, so scripts can shadow a built-in
in their own scopes but never overwrite it.
"""

from typing import Any, Dict

from .exceptions import EvalError
from .scope import Scope
from .values import Args, Class, Construct, EvalContext, Func, Set


def _type_name(value: Any) -> str:
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Func):
        return "function"
    if isinstance(value, Class):
        return "class"
    return {
        int: "integer",
        float: "float",
        str: "string",
        list: "array",
        dict: "dictionary",
    }.get(type(value), type(value).__name__)


def repr_(ctx: EvalContext, args: Args) -> str:
    return repr(args.expect("value"))


def type_(ctx: EvalContext, args: Args) -> str:
    return _type_name(args.expect("value"))


def len_(ctx: EvalContext, args: Args) -> int:
    value = args.expect("collection")
    if not isinstance(value, (str, list, dict)):
        raise EvalError(f"expected string, array or dictionary, found {_type_name(value)}")
    return len(value)


def str_(ctx: EvalContext, args: Args) -> str:
    value = args.expect("value")
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        return str(value)
    raise EvalError(f"cannot convert {_type_name(value)} to string")


def int_(ctx: EvalContext, args: Args) -> int:
    value = args.expect("value")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise EvalError(f"cannot convert {_type_name(value)} to integer")


def float_(ctx: EvalContext, args: Args) -> float:
    value = args.expect("value")
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        raise EvalError(f"cannot convert {_type_name(value)} to float")


def print_(ctx: EvalContext, args: Args) -> None:
    sep = args.named("sep", " ")
    parts = []
    while args.positional:
        value = args.eat()
        parts.append(value if isinstance(value, str) else repr(value))
    ctx.output.append(sep.join(parts))


def assert_(ctx: EvalContext, args: Args) -> None:
    condition = args.expect("condition")
    message = args.named("message")
    if not condition:
        raise EvalError(message or "assertion failed")


class Record(Construct, Set):
    """A plain dictionary built from named arguments.

    `set` stores defaults in the context's style map; `construct` merges the
    call's named arguments over them.
    """

    @classmethod
    def construct(cls, ctx: EvalContext, args: Args) -> Dict[str, Any]:
        record = dict(ctx.styles.get("record", {}))
        record.update(args.named_args)
        args.named_args.clear()
        return record

    @classmethod
    def set(cls, ctx: EvalContext, args: Args) -> None:
        ctx.styles.setdefault("record", {}).update(args.named_args)
        args.named_args.clear()


def new_library() -> Scope:
    """Create a fresh base scope with the standard definitions."""
    std = Scope()
    std.define_func("repr", repr_)
    std.define_func("type", type_)
    std.define_func("len", len_)
    std.define_func("str", str_)
    std.define_func("int", int_)
    std.define_func("float", float_)
    std.define_func("print", print_)
    std.define_func("assert", assert_)
    std.define_class("record", Record)
    std.define_const("none", None)
    std.define_const("true", True)
    std.define_const("false", False)
    return std
