"""Application engine: calls Lambdas and Python builtins uniformly.

Python builtins registered in the environment take (env, args) where args
are already evaluated.
"""

from __future__ import annotations

from typing import Callable

from slotform import LispValue, EvaluatorFn
from slotform.types.environment import Environment
from slotform.types.errors import SlotformTypeError
from slotform.types.lambda_fn import Lambda


def apply_lambda(
    fn: Lambda, args: list[LispValue], macros, evaluate_fn: EvaluatorFn
) -> LispValue:
    new_env = fn.extend_env(list(args), evaluate_fn=evaluate_fn, macros=macros)
    return evaluate_fn(fn.body, new_env, macros)


def apply(
    head: Lambda | Callable[[Environment, list[LispValue]], LispValue] | object,
    args: list[LispValue],
    env: Environment,
    macros,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Lambda or a Python callable; anything else is a type error."""
    if isinstance(head, Lambda):
        return apply_lambda(head, args, macros, evaluate_fn)
    elif callable(head):
        return head(env, args)
    else:
        from slotform.printer import to_lisp

        raise SlotformTypeError(f"Cannot apply non-function {to_lisp(head)}")
