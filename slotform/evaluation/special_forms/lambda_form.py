from slotform import EvaluatorFn
from slotform import SExpression, LispValue
from slotform.types.errors import SlotformArityError, SlotformTypeError
from slotform.types.environment import Environment
from slotform.types.lambda_fn import Lambda
from slotform.types.macro_environment import MacroEnvironment
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    # (lambda (params) body...) allows zero or more body forms.
    # Multiple forms are an implicit progn; no body forms return nil.
    if not tail:
        raise SlotformArityError("lambda requires at least a parameter list")

    params = tail[0]
    if params is Nil:
        params = []
    if not isinstance(params, list):
        raise SlotformTypeError("lambda parameter list must be a list")
    body_forms = tail[1:]

    if not body_forms:
        body = Nil
    elif len(body_forms) == 1:
        body = body_forms[0]
    else:
        body = [Symbol("progn"), *body_forms]

    return Lambda(params, body, env)
