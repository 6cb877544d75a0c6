# quantalogic_scopes/__init__.py
from .exceptions import ConstantWriteError, EvalError, ScopeUnderflowError
from .slot import BaseSlot, ConstSlot, Slot
from .scope import Scope, ScopeStack
from .values import Args, Class, Construct, EvalContext, Func, Set
from .library import new_library

__all__ = [
    'BaseSlot',
    'Slot',
    'ConstSlot',
    'Scope',
    'ScopeStack',
    'Args',
    'EvalContext',
    'Func',
    'Class',
    'Construct',
    'Set',
    'new_library',
    'ConstantWriteError',
    'ScopeUnderflowError',
    'EvalError',
]
