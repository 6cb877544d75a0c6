import pytest
from quantalogic_scopes import Args, Class, Construct, EvalError, Func, Set


def test_args_consumed_in_order():
    args = Args([1, 2], {"flag": True})
    assert args.expect("first") == 1
    assert args.eat() == 2
    assert args.eat() is None
    assert args.named("flag") is True
    assert args.named("flag", "gone") == "gone"
    args.finish()


def test_args_expect_missing():
    with pytest.raises(EvalError) as excinfo:
        Args().expect("body")
    assert str(excinfo.value) == "missing argument: body"


def test_func_equality_and_hash():
    def native(ctx, args):
        return None

    def other(ctx, args):
        return None

    assert Func("f", native) == Func("f", native)
    assert hash(Func("f", native)) == hash(Func("f", native))
    assert Func("f", native) != Func("f", other)
    assert Func("f", native) != Func("g", native)
    assert repr(Func("f", native)) == "<function f>"


def test_func_call_passes_context_and_args():
    seen = []

    def native(ctx, args):
        seen.append(ctx)
        return args.expect("value") * 2

    assert Func("double", native).call("ctx", Args([4])) == 8
    assert seen == ["ctx"]


class Box(Construct, Set):
    @classmethod
    def construct(cls, ctx, args):
        return ["box", args.expect("content")]

    @classmethod
    def set(cls, ctx, args):
        ctx["box"] = args.named("fill")


def test_class_delegates_to_type():
    box = Class("box", Box)
    assert box.construct(None, Args(["x"])) == ["box", "x"]
    styles = {}
    box.set(styles, Args(named={"fill": "blue"}))
    assert styles == {"box": "blue"}
    assert box == Class("box", Box)
    assert repr(box) == "<class box>"


def test_class_rejects_plain_types():
    with pytest.raises(TypeError, match="Construct and Set"):
        Class("int", int)
    with pytest.raises(TypeError):
        Class("not a type", Box())
