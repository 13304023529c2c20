"""Inferring a slot type from its default form.

Only literal-looking forms are inspected; nothing is ever evaluated. The
result is one of a small set of general categories, tested in a fixed order
because a value can belong to several of them: nil is both a boolean and an
empty list, a Python bool is also an int, every float is also a number.
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Mapping
from typing import Callable, Protocol

from slotform import SExpression, LispValue
from slotform.types.environment import Environment
from slotform.types.errors import SlotformUnboundSymbol
from slotform.types.lambda_fn import Lambda
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol, TRUE, FALSE, is_self_evaluating
from slotform.types.vector import Vector
from slotform.inference.slot_spec import SlotSpec

logger = logging.getLogger(__name__)

QUOTE = Symbol("quote")
FUNCTION = Symbol("function")

STRING = Symbol("string")
BOOLEAN = Symbol("boolean")
LIST = Symbol("list")
ARRAY = Symbol("array")
MAPPING = Symbol("mapping")
FLOAT = Symbol("float")
NUMBER = Symbol("integer-or-number")
SYMBOL = Symbol("symbol")
FUNCTION_TYPE = Symbol("function")


def _is_boolean(value: LispValue) -> bool:
    return value is Nil or isinstance(value, bool) or value in (TRUE, FALSE)


def _is_list(value: LispValue) -> bool:
    return isinstance(value, list) and not isinstance(value, Vector)


# Order matters: the first matching category wins.
CATEGORY_PRIORITY: list[tuple[Symbol, Callable[[LispValue], bool]]] = [
    (STRING, lambda v: isinstance(v, str)),
    (BOOLEAN, _is_boolean),
    (LIST, _is_list),
    (ARRAY, lambda v: isinstance(v, (Vector, bytes, bytearray))),
    (MAPPING, lambda v: isinstance(v, Mapping)),
    (FLOAT, lambda v: isinstance(v, float)),
    (NUMBER, lambda v: isinstance(v, numbers.Number)),
]


def type_of(value: LispValue) -> Symbol:
    """The exact type of a runtime value, as a type name."""
    from slotform.types.class_def import ClassDef, Instance

    match value:
        case Instance():
            return value.cls.name
        case ClassDef():
            return Symbol("standard-class")
        case Symbol():
            return SYMBOL
        case Lambda():
            return Symbol("lambda")
    return Symbol(type(value).__name__.lower().replace("_", "-"))


def general_type_of(value: LispValue) -> Symbol:
    """The first general category `value` belongs to, else its exact type."""
    for category, matches in CATEGORY_PRIORITY:
        if matches(value):
            return category
    return type_of(value)


def classify(default_expr: SExpression, env: Environment | None = None) -> tuple[bool, Symbol | None]:
    """Infer a type from a default form without evaluating it.

    Returns (inferred, type). Compound forms other than quote and function,
    and symbols that are unbound in `env`, are not inferred.
    """
    match default_expr:
        case Vector():
            return True, ARRAY
        case [Symbol() as head, quoted] if head == QUOTE:
            if quoted is Nil or quoted == []:
                return True, LIST
            if isinstance(quoted, Symbol):
                return True, SYMBOL
            return True, general_type_of(quoted)
        case [Symbol() as head, _] if head == FUNCTION:
            return True, FUNCTION_TYPE
        case list() if default_expr:
            return False, None
        case tuple():
            return False, None
        case Symbol() if not is_self_evaluating(default_expr):
            if env is None:
                return False, None
            try:
                value = env.lookup(default_expr)
            except SlotformUnboundSymbol:
                return False, None
            return True, general_type_of(value)
    return True, general_type_of(default_expr)


class TypePolicy(Protocol):
    """Strategy deciding the type of a slot that has a default but no :type."""

    def infer(self, slot: SlotSpec, env: Environment | None = None) -> tuple[bool, SExpression]:
        ...


class GeneralTypeInference:
    """Reference type policy: classify the default form."""

    def infer(self, slot: SlotSpec, env: Environment | None = None) -> tuple[bool, SExpression]:
        found, type_expr = classify(slot.default, env)
        logger.debug("classify %s -> %s", slot.name, type_expr if found else "not inferred")
        return found, type_expr

    def __repr__(self) -> str:
        return "GeneralTypeInference()"


TYPE_POLICIES: dict[Symbol, TypePolicy] = {
    Symbol(":general"): GeneralTypeInference(),
}


def register_type_policy(selector: Symbol, policy: TypePolicy) -> None:
    TYPE_POLICIES[selector.keyword()] = policy
