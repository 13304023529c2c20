from slotform import EvaluatorFn
from slotform import SExpression, LispValue
from slotform.types.errors import SlotformArityError
from slotform.types.nil import Nil
from slotform.types.symbol import FALSE
from slotform.types.environment import Environment
from slotform.types.macro_environment import MacroEnvironment


def is_true(value: LispValue) -> bool:
    # Lisp truthiness: anything not nil or #f is true
    return not (value is Nil or value == FALSE or value is False)


def if_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) < 2:
        raise SlotformArityError("if requires a condition and a then-expression")

    if is_true(evaluate_fn(tail[0], env, macros)):
        return evaluate_fn(tail[1], env, macros)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env, macros)
    else:
        return Nil
