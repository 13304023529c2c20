"""Special form: defmacro.

    (defmacro name (params...) ["docstring"] body...)

The macro is stored as a Lambda closed over the defining environment; it
receives its arguments unevaluated and returns the expansion. A leading
string is taken as documentation when more body forms follow it.
"""

from __future__ import annotations

from slotform import EvaluatorFn, SExpression, LispValue
from slotform.printer import to_lisp
from slotform.types.errors import SlotformInvalidSymbol, SlotformArityError, SlotformTypeError
from slotform.types.symbol import Symbol
from slotform.types.lambda_fn import Lambda
from slotform.types.environment import Environment
from slotform.types.macro_environment import MacroEnvironment
from slotform.types.nil import Nil


def defmacro_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) < 3:
        raise SlotformArityError("defmacro requires a name, a parameter list and a body")

    name, params, *body = tail
    if not isinstance(name, Symbol) or name.is_keyword:
        raise SlotformInvalidSymbol(f"Macro name must be a symbol, got {to_lisp(name)}")
    if params is Nil:
        params = []
    if not isinstance(params, list):
        raise SlotformTypeError(f"{name}: macro parameter list must be a list")

    if len(body) > 1 and isinstance(body[0], str):
        body = body[1:]
    macro_body = body[0] if len(body) == 1 else [Symbol("progn"), *body]
    macros.define_macro(name, Lambda(params, macro_body, env))
    return name
