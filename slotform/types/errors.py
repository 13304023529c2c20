class SlotformError(Exception):
    """Base class for all slotform errors"""
    pass


class SlotformInvalidSymbol(SlotformError):
    """Raised when an invalid symbol is used"""
    pass


class SlotformUnboundSymbol(SlotformError):
    """Raised when a symbol is used before it is bound"""
    pass


class SlotformNameError(SlotformError):
    """Raised when a name (package, policy, class) is not known"""


class SlotformSyntaxError(SlotformError):
    """Raised when there is a syntax error"""


class SlotformArityError(SlotformError):
    """Raised when the number of arguments passed to a function is incorrect"""


class SlotformTypeError(SlotformError):
    """Raised when the types of arguments passed to a function are incorrect"""


class LispError(SlotformError):
    """Raised by (error ...) from Lisp code."""


class SlotInferenceError(SlotformError):
    """Raised at class-definition time when a typed slot has no inferable default."""

    def __init__(self, message: str, slot_name=None, type_expr=None):
        super().__init__(message)
        self.slot_name = slot_name
        self.type_expr = type_expr


class UnboundSlotError(SlotformError):
    """Raised when a slot value is required but was never supplied."""

    def __init__(self, message: str, slot_name=None):
        super().__init__(message)
        self.slot_name = slot_name


class InferenceInvariantError(SlotformError):
    """Raised when the slot transformer reaches a state it does not cover.

    This is a bug in slotform itself, never in the class being defined.
    """
