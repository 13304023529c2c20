"""Process-wide inference defaults.

The defaults come from the environment variables SLOTFORM_INITFORM_INFERENCE
(default "error") and SLOTFORM_TYPE_INFERENCE (default "general"); the value
"disabled" (or "nil") turns a facet off. An Interpreter publishes its config
as the Lisp globals *default-initform-inference* and
*default-type-inference*, which defclass* snapshots once per expansion.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from slotform.types.environment import Environment
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol

INITFORM_ENV_VAR = "SLOTFORM_INITFORM_INFERENCE"
TYPE_ENV_VAR = "SLOTFORM_TYPE_INFERENCE"

DEFAULT_INITFORM_VAR = Symbol("*default-initform-inference*")
DEFAULT_TYPE_VAR = Symbol("*default-type-inference*")

_DISABLED = {"", "disabled", "nil", "none", "off"}


def selector_from_env(var: str, default: str) -> Any:
    raw = os.environ.get(var)
    if raw is None:
        raw = default
    name = raw.strip().lstrip(":").lower()
    if name in _DISABLED:
        return Nil
    return Symbol(f":{name}")


@dataclass(frozen=True)
class InferenceConfig:
    """Which initform and type policies defclass* uses when a form does not say.

    Each field is a selector keyword (e.g. :error, :general), a policy
    object, or nil for disabled.
    """

    initform_inference: Any = Symbol(":error")
    type_inference: Any = Symbol(":general")

    @classmethod
    def from_environment(cls, env: Environment | None) -> InferenceConfig:
        """Snapshot the Lisp-level defaults, falling back to default_config()."""
        base = default_config()
        if env is None:
            return base
        initform = env.lookup(DEFAULT_INITFORM_VAR) if env.is_bound(DEFAULT_INITFORM_VAR) else base.initform_inference
        type_ = env.lookup(DEFAULT_TYPE_VAR) if env.is_bound(DEFAULT_TYPE_VAR) else base.type_inference
        return cls(initform, type_)

    def override(self, **changes: Any) -> InferenceConfig:
        return replace(self, **changes)

    def install(self, env: Environment) -> None:
        env.define(DEFAULT_INITFORM_VAR, self.initform_inference)
        env.define(DEFAULT_TYPE_VAR, self.type_inference)


def default_config() -> InferenceConfig:
    return InferenceConfig(
        initform_inference=selector_from_env(INITFORM_ENV_VAR, "error"),
        type_inference=selector_from_env(TYPE_ENV_VAR, "general"),
    )
