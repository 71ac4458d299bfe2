"""Exceptions raised by the thought-processing core"""


class BetterThinkingError(Exception):
    """Base class for errors raised while processing a thought"""


class StepValidationError(BetterThinkingError):
    """Raised when a thought payload breaks the input contract.

    ``field`` names the offending key as the caller sent it, so the message
    can be forwarded to the client unchanged.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message
