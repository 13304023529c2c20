"""defclass*: defclass with inferred slot types and defaults.

    (defclass* point ()
      ((x 0)
       (label :type string)
       (owner :type user))
      (:initform-inference :deferred-error)
      (:documentation "A labelled point."))

expands into

    (defclass point ()
      ((x 0 :type integer-or-number)
       (label "" :type string)
       (owner #<unsupplied-slot owner> :type user))
      (:documentation "A labelled point."))

The :initform-inference and :type-inference class options select the
policies for this form only and are not passed on to defclass. Without them
the defaults in effect when the form is expanded apply (see slotform.config).
"""

from __future__ import annotations

import logging
from typing import Any

from slotform import SExpression
from slotform.config import InferenceConfig
from slotform.printer import to_lisp
from slotform.types.environment import Environment
from slotform.types.errors import SlotformArityError, SlotformNameError, SlotformTypeError
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol
from slotform.inference.initform_inference import INITFORM_POLICIES, InitformPolicy
from slotform.inference.transformer import transform_slots
from slotform.inference.type_inference import TYPE_POLICIES, TypePolicy

logger = logging.getLogger(__name__)

DEFCLASS = Symbol("defclass")
QUOTE = Symbol("quote")
DISABLED = Symbol(":disabled")
INITFORM_OPTION = Symbol(":initform-inference")
TYPE_OPTION = Symbol(":type-inference")

_OPTION_FIELDS = {
    INITFORM_OPTION: "initform_inference",
    TYPE_OPTION: "type_inference",
}


def _resolve(selector: Any, registry: dict, kind: str) -> Any:
    if selector is None or selector is Nil:
        return None
    if isinstance(selector, Symbol):
        selector = selector.keyword()
        if selector == DISABLED:
            return None
        try:
            return registry[selector]
        except KeyError:
            known = ", ".join(str(k) for k in registry)
            raise SlotformNameError(
                f"Unknown {kind} inference policy {selector} (known: {known})"
            ) from None
    if callable(getattr(selector, "infer", None)):
        return selector
    raise SlotformTypeError(f"Not a {kind} inference policy: {selector!r}")


def resolve_initform_policy(selector: Any) -> InitformPolicy | None:
    return _resolve(selector, INITFORM_POLICIES, "initform")


def resolve_type_policy(selector: Any) -> TypePolicy | None:
    return _resolve(selector, TYPE_POLICIES, "type")


def split_options(options: list[SExpression]) -> tuple[dict[str, Any], list[SExpression]]:
    """Separate the inference overrides from the options meant for defclass."""
    overrides: dict[str, Any] = {}
    passthrough: list[SExpression] = []
    for option in options:
        if isinstance(option, list) and option and option[0] in _OPTION_FIELDS:
            if len(option) != 2:
                raise SlotformArityError(f"{option[0]} takes exactly one value")
            value = option[1]
            if isinstance(value, list) and len(value) == 2 and value[0] == QUOTE:
                value = value[1]
            overrides[_OPTION_FIELDS[option[0]]] = value
        else:
            passthrough.append(option)
    return overrides, passthrough


def expand_defclass_star(
    args: list[SExpression],
    env: Environment | None = None,
    config: InferenceConfig | None = None,
) -> SExpression:
    """Expand the arguments of a defclass* form into a defclass form.

    `config` defaults to a snapshot of the defaults visible from `env`.
    """
    if len(args) < 3:
        raise SlotformArityError("defclass* requires a name, a base list and a slot list")
    name, bases, slots, *options = args
    if not isinstance(name, Symbol):
        raise SlotformTypeError(f"defclass* name must be a symbol, got {to_lisp(name)}")
    bases = [] if bases is Nil else bases
    slots = [] if slots is Nil else slots
    if not isinstance(bases, list) or not isinstance(slots, list):
        raise SlotformTypeError("defclass* base and slot lists must be lists")

    if config is None:
        config = InferenceConfig.from_environment(env)
    overrides, passthrough = split_options(options)
    if overrides:
        config = config.override(**overrides)

    initform_policy = resolve_initform_policy(config.initform_inference)
    type_policy = resolve_type_policy(config.type_inference)
    logger.debug(
        "defclass* %s: initform policy %r, type policy %r", name, initform_policy, type_policy
    )

    new_slots = transform_slots(slots, initform_policy, type_policy, env)
    return [DEFCLASS, name, bases, new_slots, *passthrough]


def defclass_star_macro(args: list[SExpression], env: Environment) -> SExpression:
    """Macro transformer registered as defclass*."""
    return expand_defclass_star(args, env)


def define_class(
    name: Symbol,
    bases: list[Symbol],
    slots: list[SExpression],
    options: list[SExpression] = (),
    *,
    env: Environment,
    macros=None,
    config: InferenceConfig | None = None,
):
    """Expand a defclass* and evaluate it in `env`; returns the new ClassDef."""
    from slotform.evaluation.evaluator import evaluate

    form = expand_defclass_star([name, list(bases), list(slots), *options], env, config)
    return evaluate(form, env, macros)
