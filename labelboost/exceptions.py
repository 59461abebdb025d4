class LabelBoostError(Exception):
    """
    Base class of the errors raised by labelboost.
    """
    pass


class InvalidInput(LabelBoostError, ValueError):
    """
    Raised at construction when the examples, the features or the labels are empty, or when a required argument does not make sense.
    """
    pass


class InvariantViolation(LabelBoostError, RuntimeError):
    """
    Raised when the internal state is corrupted, for instance when the weights of a distribution do not form a valid cumulative distribution. It is not recoverable.
    """
    pass
