"""Lambda function representation and argument binding for slotform."""

from __future__ import annotations

from io import StringIO

from slotform import SExpression, LispValue
from slotform.types.environment import Environment
from slotform.types.symbol import Symbol
from slotform.types.errors import SlotformArityError
from slotform.types.nil import Nil

OPTIONAL = Symbol("&optional")
REST = Symbol("&rest")
BODY = Symbol("&body")


class Lambda:
    """A first-class lambda with formal parameters, body, and closure env."""

    __slots__ = ("formals", "body", "env")

    def __init__(
        self, formals: list[Symbol], body: SExpression, env: Environment | None = None
    ):
        self.formals: list[Symbol] = list(formals)
        self.body: SExpression = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def __str__(self) -> str:
        from slotform.printer import to_lisp

        with StringIO() as buffer:
            buffer.write("(λ (")
            buffer.write(" ".join(str(f) for f in self.formals))
            buffer.write(") ")
            buffer.write(to_lisp(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)

    def extend_env(
        self,
        args: list[LispValue],
        evaluate_fn=None,
        macros=None,
    ) -> Environment:
        """
        Bind argument values to the formal parameters and return a new
        Environment (whose outer is the closure env) for evaluating the body.

        Supports required positionals, &optional (name or (name default)) and
        &rest/&body. Optional defaults are evaluated in the new frame, so they
        may refer to earlier parameters.
        """
        local_env = Environment(outer=self.env)
        supplied = list(args)
        mode = "required"
        for formal in self.formals:
            if formal == OPTIONAL:
                mode = "optional"
                continue
            if formal in (REST, BODY):
                mode = "rest"
                continue
            if mode == "required":
                if not supplied:
                    raise SlotformArityError(f"Too few arguments; missing parameter {formal}")
                local_env.define(formal, supplied.pop(0))
            elif mode == "optional":
                name = formal if isinstance(formal, Symbol) else formal[0]
                if supplied:
                    local_env.define(name, supplied.pop(0))
                elif isinstance(formal, list) and len(formal) > 1 and evaluate_fn is not None:
                    local_env.define(name, evaluate_fn(formal[1], local_env, macros))
                else:
                    local_env.define(name, Nil)
            else:
                local_env.define(formal, supplied)
                supplied = []
        if supplied:
            raise SlotformArityError(f"Too many arguments: {supplied}")
        return local_env
