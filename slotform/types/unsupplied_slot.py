from __future__ import annotations

from slotform import SExpression
from slotform.types.errors import UnboundSlotError


class UnsuppliedSlot:
    """Default value that fails when it is used.

    Emitted as a slot default for typed slots with no known zero value, so
    that a missing initarg surfaces when an instance is constructed instead
    of when the class is defined. The host runtime calls it in place of a
    default.
    """

    __slots__ = ("slot_name", "type_expr")

    def __init__(self, slot_name: SExpression, type_expr: SExpression):
        self.slot_name = slot_name
        self.type_expr = type_expr

    def __call__(self):
        from slotform.printer import to_lisp

        raise UnboundSlotError(
            f"Slot {self.slot_name} of type {to_lisp(self.type_expr)} must be "
            f"supplied: no default value could be inferred",
            slot_name=self.slot_name,
        )

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, UnsuppliedSlot)
            and self.slot_name == other.slot_name
            and self.type_expr == other.type_expr
        )

    def __hash__(self) -> int:
        return hash((UnsuppliedSlot, self.slot_name))

    def __repr__(self) -> str:
        return f"#<unsupplied-slot {self.slot_name}>"
