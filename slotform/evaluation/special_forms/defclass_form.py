from __future__ import annotations

from typing import Callable

from slotform import SExpression, LispValue, EvaluatorFn
from slotform.printer import to_lisp
from slotform.types.class_def import ClassDef, Instance, SlotDefinition
from slotform.types.errors import SlotformArityError, SlotformTypeError
from slotform.types.environment import Environment
from slotform.types.macro_environment import MacroEnvironment
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol, TRUE, FALSE
from slotform.inference.slot_spec import TYPE_KEY, parse_slot

INITARG = Symbol(":initarg")
ACCESSOR = Symbol(":accessor")
DOCUMENTATION = Symbol(":documentation")


def keyword_args(cls: ClassDef, args: list[LispValue]) -> dict[Symbol, LispValue]:
    if len(args) % 2:
        raise SlotformArityError(f"{cls.name} constructor expects :initarg value pairs")
    keys = args[::2]
    for k in keys:
        if not (isinstance(k, Symbol) and k.is_keyword):
            raise SlotformTypeError(f"{cls.name} initarg must be a keyword, got {k}")
    return dict(zip(keys, args[1::2]))


def _slot_definition(class_name: Symbol, declaration: SExpression) -> SlotDefinition:
    spec = parse_slot(declaration)
    known = (TYPE_KEY, INITARG, ACCESSOR, DOCUMENTATION)
    return SlotDefinition(
        name=spec.name,
        has_default=spec.has_default,
        default=spec.default,
        type_expr=spec.type_expr,
        initarg=spec.option(INITARG, spec.name.keyword()),
        accessor=spec.option(ACCESSOR, Symbol(f"{class_name}-{spec.name}")),
        documentation=spec.option(DOCUMENTATION),
        metadata=tuple((k, v) for k, v in spec.options if k not in known),
    )


def _effective_slots(bases: list[ClassDef], own: list[SlotDefinition]) -> list[SlotDefinition]:
    # Inherited slots first, in base order; a redefinition replaces the inherited slot.
    own_names = {s.name for s in own}
    slots: list[SlotDefinition] = []
    seen: set[Symbol] = set()
    for base in bases:
        for s in base.slots:
            if s.name not in seen and s.name not in own_names:
                seen.add(s.name)
                slots.append(s)
    return slots + own


def defclass_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(defclass name (base...) (slot...) (:option value)...)

    Binds the class name, make-<name>, one accessor per slot and <name>-p.
    """
    if len(tail) < 3:
        raise SlotformArityError("defclass requires a name, a base list and a slot list")
    class_name, base_names, slot_decls, *option_forms = tail
    if not isinstance(class_name, Symbol):
        raise SlotformTypeError(f"defclass name must be a Symbol, got {class_name}")

    bases = []
    for base_name in [] if base_names is Nil else base_names:
        base = env.lookup(base_name)
        if not isinstance(base, ClassDef):
            raise SlotformTypeError(f"{base_name} does not name a class")
        bases.append(base)

    own = [_slot_definition(class_name, d) for d in ([] if slot_decls is Nil else slot_decls)]
    names = [s.name for s in own]
    if len(set(names)) != len(names):
        raise SlotformArityError(f"{class_name} declares a slot more than once")

    options = {}
    for opt in option_forms:
        if not isinstance(opt, list) or not opt or not isinstance(opt[0], Symbol):
            raise SlotformTypeError(f"Malformed class option {opt}")
        options[opt[0]] = opt[1] if len(opt) == 2 else opt[1:]

    cls = ClassDef(
        class_name, bases, _effective_slots(bases, own), options, env, evaluate_fn, macros
    )
    env.define(class_name, cls)

    def make(env_inner: Environment, args: list[LispValue]) -> Instance:
        return cls.make_instance(keyword_args(cls, args))

    env.define(Symbol(f"make-{class_name}"), make)

    def predicate(env_inner: Environment, args: list[LispValue]) -> Symbol:
        if len(args) != 1:
            raise SlotformArityError(f"{class_name}-p requires exactly 1 argument")
        obj = args[0]
        return TRUE if isinstance(obj, Instance) and obj.cls.is_subclass_of(cls) else FALSE

    env.define(Symbol(f"{class_name}-p"), predicate)

    # inherited slots keep the accessors their defining class bound
    for slot in own:

        def make_accessor(
            accessor: Symbol, name: Symbol
        ) -> Callable[[Environment, list[LispValue]], LispValue]:
            def read_slot(env_inner: Environment, args: list[LispValue]) -> LispValue:
                if len(args) != 1:
                    raise SlotformArityError(f"{accessor} requires exactly 1 argument")
                obj = args[0]
                if not (isinstance(obj, Instance) and obj.cls.is_subclass_of(cls)):
                    raise SlotformTypeError(f"{accessor} expects an instance of {class_name}, got {to_lisp(obj)}")
                return obj.get(name)

            return read_slot

        env.define(slot.accessor, make_accessor(slot.accessor, slot.name))
    return cls
