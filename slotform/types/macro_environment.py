from __future__ import annotations
from typing import Callable
from itertools import count

from slotform import SExpression, EvaluatorFn
from slotform.types.environment import Environment
from slotform.types.lambda_fn import Lambda
from slotform.types.symbol import Symbol

QUOTE = Symbol("quote")
QUASIQUOTE = Symbol("quasiquote")


class MacroEnvironment:
    """
    Macro environment mapping macro names (Symbols) to Lambda transformers
    or Python callable transformer functions.

    Python transformers are called as transformer(args, env) and return the
    expansion; Lambda transformers (from defmacro) have their body evaluated
    with the raw, unevaluated arguments bound to their formals.
    """

    def __init__(self):
        self.macros: dict[Symbol, Lambda | Callable] = {}
        self._gensym_counter = count(1)

    def define_macro(self, name: Symbol, transformer: Lambda | Callable) -> None:
        self.macros[name] = transformer

    def is_macro(self, sym: SExpression) -> bool:
        return isinstance(sym, Symbol) and sym in self.macros

    def gen_sym(self, prefix: str = "G") -> Symbol:
        return Symbol(f"{prefix}{next(self._gensym_counter)}")

    def _run_transformer(
        self,
        args: list[SExpression],
        transformer: Lambda,
        evaluator: EvaluatorFn,
    ) -> SExpression:
        # Bind raw args, evaluate the body once, do NOT evaluate the expansion here.
        call_env = transformer.extend_env(list(args), evaluate_fn=evaluator, macros=self)
        return evaluator(transformer.body, call_env, self)

    def expand_1(
        self, form: SExpression, evaluator: EvaluatorFn, env: Environment
    ) -> SExpression:
        """Expand only the head-position macro if present."""
        if isinstance(form, list) and form and self.is_macro(form[0]):
            transformer = self.macros[form[0]]
            args = form[1:]
            if isinstance(transformer, Lambda):
                return self._run_transformer(args, transformer, evaluator)
            return transformer(args, env)
        return form  # Not a macro call, unchanged

    def macro_expand_head(
        self, form: SExpression, evaluator: EvaluatorFn, env: Environment
    ) -> SExpression:
        """Expand the head position repeatedly until it is no longer a macro call."""
        cur = form
        while True:
            nxt = self.expand_1(cur, evaluator, env)
            # Structural equality detects the fixpoint (not object identity)
            if nxt == cur:
                return cur
            cur = nxt

    def macro_expand_all(
        self, form: SExpression, evaluator: EvaluatorFn, env: Environment
    ) -> SExpression:
        expanded = self.macro_expand_head(form, evaluator, env)

        # Do not recurse into (quote ...) or (quasiquote ...) templates.
        if type(expanded) is list:
            if expanded and expanded[0] in (QUOTE, QUASIQUOTE):
                return expanded
            return [self.macro_expand_all(x, evaluator, env) for x in expanded]

        if isinstance(expanded, tuple) and len(expanded) == 2:
            lst, tail = expanded
            lst_exp = [self.macro_expand_all(x, evaluator, env) for x in lst]
            return lst_exp, self.macro_expand_all(tail, evaluator, env)

        return expanded
