"""Registry of special forms for the slotform evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table before ordinary function application.
Handlers are called as handler(tail, env, macros, evaluate_fn).
"""

from slotform.types.symbol import Symbol
from slotform.evaluation.special_forms.binding_forms import define_form, set_form
from slotform.evaluation.special_forms.progn_form import progn_form
from slotform.evaluation.special_forms.defmacro_form import defmacro_form
from slotform.evaluation.special_forms.defclass_form import defclass_form
from slotform.evaluation.special_forms.quote_forms import (
    quote_form,
    quasiquote_form,
    unquote_form,
    unquote_splice_form,
    function_form,
)
from slotform.evaluation.special_forms.lambda_form import lambda_form
from slotform.evaluation.special_forms.if_form import if_form
from slotform.evaluation.special_forms.macroexpand_forms import macroexpand1_form, macroexpand_form

SPECIAL_FORMS = {
    Symbol("set"): set_form,
    Symbol("progn"): progn_form,
    Symbol("defmacro"): defmacro_form,
    Symbol("defclass"): defclass_form,
    Symbol("quote"): quote_form,
    Symbol("quasiquote"): quasiquote_form,
    Symbol("unquote"): unquote_form,
    Symbol("unquote-splicing"): unquote_splice_form,
    Symbol("function"): function_form,
    Symbol("lambda"): lambda_form,
    Symbol("define"): define_form,
    Symbol("if"): if_form,
    Symbol("macroexpand-1"): macroexpand1_form,
    Symbol("macroexpand"): macroexpand_form,
}
