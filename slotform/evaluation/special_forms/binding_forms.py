"""Special forms that bind and rebind variables: define and set.

define creates a binding in the current environment; set updates the
nearest existing one. set is how the inference defaults are changed from
Lisp code:

    (set *default-initform-inference* :nil-fallback)
"""

from __future__ import annotations

from slotform import EvaluatorFn, SExpression, LispValue
from slotform.printer import to_lisp
from slotform.types.environment import Environment
from slotform.types.errors import SlotformArityError, SlotformInvalidSymbol
from slotform.types.macro_environment import MacroEnvironment
from slotform.types.symbol import Symbol, is_self_evaluating


def _binding(form: str, tail: list[SExpression]) -> tuple[Symbol, SExpression]:
    if len(tail) != 2:
        raise SlotformArityError(f"{form} requires exactly 2 arguments: ({form} name value)")
    name, value_expr = tail
    if not isinstance(name, Symbol) or is_self_evaluating(name):
        raise SlotformInvalidSymbol(f"{form} cannot bind {to_lisp(name)}")
    return name, value_expr


def define_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(define name value) binds name in the current environment and returns it."""
    name, value_expr = _binding("define", tail)
    env.define(name, evaluate_fn(value_expr, env, macros))
    return name


def set_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(set name value) rebinds an existing variable and returns the new value."""
    name, value_expr = _binding("set", tail)
    value = evaluate_fn(value_expr, env, macros)
    env.set(name, value)
    return value
