"""Special forms that expose the macro expander to Lisp code.

macroexpand-1: expand a single step at the head position if it is a macro.
macroexpand: fully expand a form (except inside quote/quasiquote).

Both return the expansion as an S-expression and do not evaluate it, which
makes them the way to inspect what defclass* hands to defclass:

    (macroexpand-1 '(defclass* point () ((x 0))))
    ;; => (defclass point () ((x 0 :type integer-or-number)))
"""

from slotform import SExpression, EvaluatorFn
from slotform.types.errors import SlotformArityError
from slotform.types.symbol import Symbol


def _unquoted(tail: list[SExpression], name: str) -> SExpression:
    if len(tail) != 1:
        raise SlotformArityError(f"{name} expects exactly 1 argument")
    form = tail[0]
    # Unwrap a single leading (quote <form>) to match CL usage: (macroexpand-1 '(...))
    if isinstance(form, list) and form and form[0] == Symbol("quote") and len(form) > 1:
        form = form[1]
    return form


def macroexpand1_form(tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn):
    """(macroexpand-1 form): expand the head macro once and return the result."""
    return macros.expand_1(_unquoted(tail, "macroexpand-1"), evaluate_fn, env)


def macroexpand_form(tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn):
    """(macroexpand form): fully expand a form and return the expansion."""
    return macros.macro_expand_all(_unquoted(tail, "macroexpand"), evaluate_fn, env)
