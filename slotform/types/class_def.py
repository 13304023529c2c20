"""Runtime representation of classes built by the defclass special form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from slotform import SExpression, LispValue
from slotform.types.environment import Environment
from slotform.types.errors import SlotformArityError, UnboundSlotError
from slotform.types.symbol import Symbol
from slotform.types.unsupplied_slot import UnsuppliedSlot


@dataclass(frozen=True)
class SlotDefinition:
    """One effective slot of a class, as seen by the runtime."""

    name: Symbol
    has_default: bool = False
    default: SExpression = None
    type_expr: SExpression = None
    initarg: Symbol | None = None
    accessor: Symbol | None = None
    documentation: str | None = None
    metadata: tuple = ()


@dataclass
class ClassDef:
    """A class: name, direct bases, effective slots and class options.

    Default forms are evaluated in `env` (the environment the class was
    defined in) each time an instance is made.
    """

    name: Symbol
    bases: list[ClassDef]
    slots: list[SlotDefinition]
    options: dict[Symbol, LispValue] = field(default_factory=dict)
    env: Environment | None = field(default=None, repr=False)
    evaluate_fn: Callable | None = field(default=None, repr=False)
    macros: object = field(default=None, repr=False)

    @property
    def documentation(self) -> str | None:
        return self.options.get(Symbol(":documentation"))

    def slot(self, name: Symbol) -> SlotDefinition:
        for s in self.slots:
            if s.name == name:
                return s
        raise SlotformArityError(f"{self.name} has no slot named {name}")

    def slot_names(self) -> list[Symbol]:
        return [s.name for s in self.slots]

    def is_subclass_of(self, other: ClassDef) -> bool:
        return self is other or any(b.is_subclass_of(other) for b in self.bases)

    def make_instance(self, initargs: dict[Symbol, LispValue]) -> Instance:
        """Build an instance from keyword initargs.

        Supplied initargs win. Otherwise the slot default is evaluated; an
        UnsuppliedSlot default is called, which raises. Slots with neither
        stay unbound.
        """
        by_initarg = {s.initarg: s for s in self.slots}
        unknown = [k for k in initargs if k not in by_initarg]
        if unknown:
            raise SlotformArityError(
                f"Invalid initargs for {self.name}: {', '.join(str(k) for k in unknown)}"
            )
        values: dict[Symbol, LispValue] = {}
        for s in self.slots:
            if s.initarg in initargs:
                values[s.name] = initargs[s.initarg]
            elif s.has_default:
                value = self.evaluate_fn(s.default, self.env, self.macros)
                if isinstance(value, UnsuppliedSlot):
                    value = value()
                values[s.name] = value
        return Instance(self, values)

    def __repr__(self) -> str:
        return f"#<class {self.name}>"


class Instance:
    __slots__ = ("cls", "values")

    def __init__(self, cls: ClassDef, values: dict[Symbol, LispValue]):
        self.cls = cls
        self.values = values

    def is_bound(self, name: Symbol) -> bool:
        self.cls.slot(name)
        return name in self.values

    def get(self, name: Symbol) -> LispValue:
        self.cls.slot(name)
        try:
            return self.values[name]
        except KeyError:
            raise UnboundSlotError(
                f"Slot {name} is unbound in an instance of {self.cls.name}",
                slot_name=name,
            ) from None

    def set(self, name: Symbol, value: LispValue) -> LispValue:
        self.cls.slot(name)
        self.values[name] = value
        return value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Instance) and self.cls is other.cls and self.values == other.values

    __hash__ = None

    def __repr__(self) -> str:
        from slotform.printer import to_lisp

        parts = [
            f"{s.name}={to_lisp(self.values[s.name])}" if s.name in self.values else f"{s.name}=#<unbound>"
            for s in self.cls.slots
        ]
        return f"#<{self.cls.name} {' '.join(parts)}>"
