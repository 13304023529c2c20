"""Core evaluator for slotform.

Implements head-position macro expansion, special-form dispatch and
function application.
"""

from __future__ import annotations

from slotform import SExpression, LispValue
from slotform.printer import to_lisp
from slotform.types.environment import Environment
from slotform.types.errors import SlotformSyntaxError
from slotform.types.macro_environment import MacroEnvironment
from slotform.types.symbol import Symbol, is_self_evaluating
from slotform.types.vector import Vector
from slotform.evaluation.apply import apply
from slotform.evaluation.special_forms import SPECIAL_FORMS


def evaluate(
    expr: SExpression, env: Environment, macros: MacroEnvironment | None = None
) -> LispValue:
    if macros is None:
        macros = MacroEnvironment()

    match expr:
        case Vector():
            return expr
        case tuple():
            raise SlotformSyntaxError(f"Cannot evaluate dotted list {to_lisp(expr)}")
        case []:
            return []
        case [Symbol() as head, *tail_args] if macros.is_macro(head):
            expanded = macros.expand_1(expr, evaluate, env)
            return evaluate(expanded, env, macros)
        case [Symbol() as head, *tail_args] if head in SPECIAL_FORMS:
            return SPECIAL_FORMS[head](tail_args, env, macros, evaluate)
        case [head, *tail_args]:
            fn = evaluate(head, env, macros)
            args = [evaluate(arg, env, macros) for arg in tail_args]
            return apply(fn, args, env, macros, evaluate)
        case Symbol():
            # Keywords and #t/#f are self-evaluating
            if is_self_evaluating(expr):
                return expr
            return env.lookup(expr)

    # --- Atoms return as-is ---
    return expr
