"""Builtin macro transformers (implemented in Python)."""

from typing import Any

from slotform import SExpression
from slotform.types.errors import SlotformArityError, SlotformTypeError
from slotform.types.macro_environment import MacroEnvironment
from slotform.types.symbol import Symbol
from slotform.inference.defclass_star import defclass_star_macro


def let_macro(args: list[SExpression], env: Any) -> SExpression:
    """
    (let ((var1 val1) (var2 val2) ...) body...)
    => ((lambda (var1 var2 ...) body...) val1 val2 ...)
    """
    if len(args) < 2:
        raise SlotformArityError("Let requires bindings and at least one body form")

    bindings = args[0]
    body = list(args[1:])

    if not isinstance(bindings, list):
        raise SlotformTypeError("Let bindings must be a list")

    vars_ = []
    vals_ = []
    for b in bindings:
        if not isinstance(b, list) or len(b) != 2 or not isinstance(b[0], Symbol):
            raise SlotformTypeError(f"Let binding must be (name value), got {b}")
        vars_.append(b[0])
        vals_.append(b[1])

    return [[Symbol("lambda"), vars_] + body] + vals_


def defun_macro(args: list[SExpression], env: Any) -> SExpression:
    """(defun name (params) body...) => (define name (lambda (params) body...))"""
    if len(args) < 3:
        raise SlotformArityError(
            "defun requires at least 3 arguments: (defun name (params) body...)"
        )
    name, params, *body = args
    return [Symbol("define"), name, [Symbol("lambda"), params] + body]


def register(macro_env: MacroEnvironment) -> None:
    """Register builtin macros in the provided MacroEnvironment."""
    macro_env.define_macro(Symbol("defun"), defun_macro)
    macro_env.define_macro(Symbol("let"), let_macro)
    macro_env.define_macro(Symbol("defclass*"), defclass_star_macro)
