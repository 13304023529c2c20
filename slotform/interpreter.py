from __future__ import annotations

from slotform import LispValue
from slotform.config import InferenceConfig, default_config
from slotform.reader.parser import lex, TokenStream
from slotform.types.nil import Nil
from slotform.types.macro_environment import MacroEnvironment
from slotform.types.environment import Environment
from slotform.evaluation.evaluator import evaluate
from slotform.builtin.env_builtin import register
from slotform.builtin.macro_builtin import register as register_macros


class Interpreter:
    """
    Reads and evaluates slotform code, keeping an Environment and a
    MacroEnvironment across calls.

    `config` supplies the inference defaults for defclass*; it is published
    as *default-initform-inference* and *default-type-inference*.
    """

    def __init__(self, prelude: str | None = None, config: InferenceConfig | None = None):
        self.macros: MacroEnvironment = MacroEnvironment()
        register_macros(self.macros)

        self.env: Environment = Environment()
        register(self.env, self.macros)

        self.config: InferenceConfig = config if config is not None else default_config()
        self.config.install(self.env)

        if prelude:
            self.eval(prelude)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`; return the last value (nil if none)."""
        stream = TokenStream(lex(code))
        result: LispValue = Nil
        while (expr := stream.parse_expr()) is not None:
            result = evaluate(expr, self.env, self.macros)
        return result
