"""Parsing of slot declarations.

A slot declaration is either a bare symbol or a list

    (name [default] option value option value ...)

The positional default is present exactly when the part after the name has
odd length. Options are keyword/value pairs; `:type` is the one the
inference pipeline cares about, everything else is carried along untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from slotform import SExpression
from slotform.printer import to_lisp
from slotform.types.errors import SlotformSyntaxError
from slotform.types.symbol import Symbol

TYPE_KEY = Symbol(":type")


@dataclass(frozen=True)
class SlotSpec:
    name: Symbol
    has_default: bool = False
    default: SExpression = None
    options: tuple[tuple[SExpression, SExpression], ...] = ()

    @property
    def has_type(self) -> bool:
        return any(k == TYPE_KEY for k, _ in self.options)

    @property
    def type_expr(self) -> SExpression:
        return self.option(TYPE_KEY)

    def option(self, key: Symbol, default: SExpression = None) -> SExpression:
        for k, v in self.options:
            if k == key:
                return v
        return default

    def with_default(self, default: SExpression) -> SlotSpec:
        return replace(self, has_default=True, default=default)

    def with_type(self, type_expr: SExpression) -> SlotSpec:
        return replace(self, options=self.options + ((TYPE_KEY, type_expr),))

    def to_declaration(self) -> SExpression:
        decl: list[SExpression] = [self.name]
        if self.has_default:
            decl.append(self.default)
        for k, v in self.options:
            decl.extend((k, v))
        return decl


def parse_slot(declaration: SExpression) -> SlotSpec:
    """Split a slot declaration into name, optional default and options."""
    if isinstance(declaration, Symbol):
        return SlotSpec(declaration)

    if not isinstance(declaration, list) or not declaration:
        raise SlotformSyntaxError(f"Malformed slot declaration: {to_lisp(declaration)}")
    name, *rest = declaration
    if not isinstance(name, Symbol):
        raise SlotformSyntaxError(f"Slot name must be a symbol, got {to_lisp(name)}")

    has_default = len(rest) % 2 == 1
    default = rest[0] if has_default else None
    pairs = rest[1:] if has_default else rest
    options = tuple(zip(pairs[::2], pairs[1::2]))
    return SlotSpec(name, has_default, default, options)
