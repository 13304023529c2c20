# Core type aliases for the slotform data model.
# Plain Python types (int, float, str, list, tuple-for-dotted-lists, dict, etc.)
# represent both code (forms) and runtime values. No explicit Cons type is defined.
#
# Naming guidance:
# - SExpression: use in reader/parser/macro/inference code for syntactic forms.
# - LispValue:  use in evaluator/runtime code for evaluated values.
# Both resolve to `Any` and are interchangeable.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias
SExpression = LispValue

# Evaluator function type: Python evaluator used inside special forms/macros
EvaluatorFn = Callable[..., LispValue]
