"""Per-slot inference: decides what, if anything, a declaration gains.

    default  type   action
    yes      yes    unchanged
    yes      no     :type appended if the type policy infers one
    no       any    default inserted if the initform policy provides one

A disabled facet (policy None) leaves the declaration unchanged.
"""

from __future__ import annotations

import logging

from slotform import SExpression
from slotform.printer import to_lisp
from slotform.types.environment import Environment
from slotform.types.errors import InferenceInvariantError
from slotform.inference.initform_inference import InitformPolicy
from slotform.inference.slot_spec import parse_slot
from slotform.inference.type_inference import TypePolicy

logger = logging.getLogger(__name__)


def transform_slot(
    declaration: SExpression,
    initform_policy: InitformPolicy | None,
    type_policy: TypePolicy | None,
    env: Environment | None = None,
) -> SExpression:
    """Return the declaration with an inferred :type or default added.

    The input is never mutated; unchanged declarations are returned as is.
    """
    slot = parse_slot(declaration)

    match slot.has_default, slot.has_type:
        case True, True:
            return declaration
        case True, False:
            if type_policy is None:
                return declaration
            found, type_expr = type_policy.infer(slot, env)
            if not found:
                return declaration
            result = slot.with_type(type_expr).to_declaration()
        case False, _:
            if initform_policy is None:
                return declaration
            found, default = initform_policy.infer(slot)
            if not found:
                return declaration
            result = slot.with_default(default).to_declaration()
        case state:
            raise InferenceInvariantError(
                f"No rule for slot {to_lisp(declaration)} in state (default, type) = {state}"
            )

    logger.debug("slot %s -> %s", to_lisp(declaration), to_lisp(result))
    return result


def transform_slots(
    declarations: list[SExpression],
    initform_policy: InitformPolicy | None,
    type_policy: TypePolicy | None,
    env: Environment | None = None,
) -> list[SExpression]:
    return [transform_slot(d, initform_policy, type_policy, env) for d in declarations]
