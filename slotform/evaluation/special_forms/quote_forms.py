from slotform import SExpression, LispValue, EvaluatorFn
from slotform.types.errors import SlotformArityError, SlotformTypeError, SlotformError
from slotform.types.symbol import Symbol

QUASIQUOTE = Symbol("quasiquote")
UNQUOTE = Symbol("unquote")
UNQUOTE_SPLICING = Symbol("unquote-splicing")


def eval_quasiquote(
    evaluate_fn: EvaluatorFn,
    expr: SExpression,
    env,
    macros,
    depth: int = 1,
) -> SExpression:
    def _process_list_part(seq):
        result_list = []
        for item in seq or []:
            if type(item) is list and item:
                head, *itail = item
                if head == QUASIQUOTE:
                    result_list.append(
                        [QUASIQUOTE, eval_quasiquote(evaluate_fn, itail[0], env, macros, depth + 1)]
                    )
                    continue
                if head == UNQUOTE and depth == 1:
                    result_list.append(evaluate_fn(itail[0], env, macros))
                    continue
                if head == UNQUOTE_SPLICING and depth == 1:
                    if not itail:
                        continue
                    spliced_val = evaluate_fn(itail[0], env, macros)
                    if not spliced_val:
                        continue  # nil splices nothing
                    if not isinstance(spliced_val, list):
                        raise SlotformTypeError("Unquote-splicing must produce a list")
                    result_list.extend(spliced_val)
                    continue
            result_list.append(eval_quasiquote(evaluate_fn, item, env, macros, depth))
        return result_list

    # Dotted list (tuple) support: (list_part, tail)
    if isinstance(expr, tuple) and len(expr) == 2:
        lst, tail = expr
        if type(tail) is list and tail and tail[0] == UNQUOTE and depth == 1:
            new_tail = evaluate_fn(tail[1], env, macros)
        else:
            new_tail = eval_quasiquote(evaluate_fn, tail, env, macros, depth)
        return _process_list_part(lst), new_tail

    if type(expr) is not list:
        return expr
    return _process_list_part(expr)


def quote_form(tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn) -> LispValue:
    if len(tail) != 1:
        raise SlotformArityError("Quote expects exactly 1 argument")
    return tail[0]


def quasiquote_form(tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn) -> LispValue:
    if len(tail) != 1:
        raise SlotformArityError("Quasiquote expects exactly 1 argument")
    return eval_quasiquote(evaluate_fn, tail[0], env, macros)


def unquote_form(tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn) -> LispValue:
    raise SlotformError("Unquote not valid outside of quasiquote")


def unquote_splice_form(tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn) -> LispValue:
    raise SlotformError("Unquote-splicing not valid outside of quasiquote")


def function_form(tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn) -> LispValue:
    """(function f) / #'f: the function named by f, or a lambda form's closure."""
    if len(tail) != 1:
        raise SlotformArityError("function expects exactly 1 argument")
    target = tail[0]
    if isinstance(target, Symbol):
        return env.lookup(target)
    return evaluate_fn(target, env, macros)
