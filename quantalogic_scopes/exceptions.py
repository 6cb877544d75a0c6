from typing import Any


class ConstantWriteError(TypeError):
    """Raised by a constant slot when something tries to write through it."""

    def __init__(self, value: Any) -> None:
        super().__init__("Cannot assign to a constant binding")
        self.value: Any = value


class ScopeUnderflowError(RuntimeError):
    """Raised when a scope stack is exited more often than it was entered.

    This signals an enter/exit mismatch in the calling evaluator, not a user
    error, and evaluators should let it propagate.
    """

    def __init__(self) -> None:
        super().__init__("no pushed scope")


class EvalError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message
