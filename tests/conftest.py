import pytest

from slotform.config import InferenceConfig
from slotform.interpreter import Interpreter
from slotform.types.symbol import Symbol


@pytest.fixture
def interp():
    """An interpreter with the reference defaults, independent of SLOTFORM_* env vars."""
    return Interpreter(config=InferenceConfig())


@pytest.fixture
def deferred_interp():
    return Interpreter(config=InferenceConfig(initform_inference=Symbol(":deferred-error")))
