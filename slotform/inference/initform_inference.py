"""Default values for slots declared without one.

zero_value maps a general type to a form producing its empty value. The
missing-default policies decide what a typed slot gets when that lookup
fails: a class-definition error, a default that fails at construction, or
no default at all.
"""

from __future__ import annotations

import logging
from typing import Protocol

from slotform import SExpression
from slotform.printer import to_lisp
from slotform.types.errors import SlotInferenceError
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol
from slotform.types.unsupplied_slot import UnsuppliedSlot
from slotform.inference.slot_spec import SlotSpec
from slotform.inference.type_inference import ARRAY, BOOLEAN, FLOAT, LIST, MAPPING, NUMBER, STRING

logger = logging.getLogger(__name__)

# Mutable zero values are constructor calls so each instance gets its own.
ZERO_VALUES: dict[Symbol, SExpression] = {
    STRING: "",
    BOOLEAN: Nil,
    LIST: [Symbol("list")],
    ARRAY: [Symbol("vector")],
    MAPPING: [Symbol("make-hash-table")],
    FLOAT: 0.0,
    NUMBER: 0,
}


def zero_value(type_expr: SExpression) -> tuple[SExpression, bool]:
    """Return (default_form, inferred) for a type; (None, False) if unknown."""
    if isinstance(type_expr, Symbol) and type_expr in ZERO_VALUES:
        form = ZERO_VALUES[type_expr]
        # hand out a fresh copy of list-shaped forms
        return (list(form) if isinstance(form, list) else form), True
    return None, False


class InitformPolicy(Protocol):
    """Strategy deciding the default of a slot declared without one."""

    def infer(self, slot: SlotSpec) -> tuple[bool, SExpression]:
        ...


class _ZeroValuePolicy:
    """Untyped slots get no default; typed ones get their zero value if known."""

    def infer(self, slot: SlotSpec) -> tuple[bool, SExpression]:
        if not slot.has_type:
            return False, None
        form, found = zero_value(slot.type_expr)
        if found:
            return True, form
        return self.unknown(slot)

    def unknown(self, slot: SlotSpec) -> tuple[bool, SExpression]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BuildErrorPolicy(_ZeroValuePolicy):
    def unknown(self, slot: SlotSpec) -> tuple[bool, SExpression]:
        type_text = to_lisp(slot.type_expr)
        raise SlotInferenceError(
            f"Cannot infer a default for slot {slot.name} of type {type_text}; "
            f"give it an explicit default",
            slot_name=slot.name,
            type_expr=slot.type_expr,
        )


class DeferredErrorPolicy(_ZeroValuePolicy):
    def unknown(self, slot: SlotSpec) -> tuple[bool, SExpression]:
        logger.debug("slot %s: deferring missing default to construction time", slot.name)
        return True, UnsuppliedSlot(slot.name, slot.type_expr)


class NilFallbackPolicy(_ZeroValuePolicy):
    def unknown(self, slot: SlotSpec) -> tuple[bool, SExpression]:
        return False, None


INITFORM_POLICIES: dict[Symbol, InitformPolicy] = {
    Symbol(":error"): BuildErrorPolicy(),
    Symbol(":deferred-error"): DeferredErrorPolicy(),
    Symbol(":nil-fallback"): NilFallbackPolicy(),
}


def register_initform_policy(selector: Symbol, policy: InitformPolicy) -> None:
    INITFORM_POLICIES[selector.keyword()] = policy
