from slotform import EvaluatorFn
from slotform import SExpression, LispValue
from slotform.types.environment import Environment
from slotform.types.macro_environment import MacroEnvironment
from slotform.types.nil import Nil


def progn_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    result: LispValue = Nil
    for e in tail:
        result = evaluate_fn(e, env, macros)
    return result
