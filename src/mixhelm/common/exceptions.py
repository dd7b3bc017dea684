"""Common exception types for mixhelm equation-of-state models."""


class ModelBuildError(ValueError):
    """Raised when a model description cannot be turned into an evaluable model."""


class ShapeMismatch(ModelBuildError):
    """Raised when the coefficient arrays of one term do not share one length."""


class NonIntegerExponent(ModelBuildError):
    """Raised when an integer-valued exponent array holds a non-integer entry."""


class OrderingViolation(ModelBuildError):
    """Raised when zero damping exponents do not form a contiguous prefix."""


class UnknownTermType(ModelBuildError):
    """Raised when a term ``type`` discriminator is not registered."""


class UnresolvableIdentifiers(ModelBuildError):
    """Raised when no identifier kind matches every required binary pair."""


class DuplicateAlias(ModelBuildError):
    """Raised when two different fluids claim the same lookup identifier."""


class MissingBinaryPair(ModelBuildError):
    """Raised when binary interaction parameters for a pair are absent."""


class MissingDepartureFunction(ModelBuildError):
    """Raised when a departure function name or alias cannot be matched."""


class ArityMismatch(ValueError):
    """Raised when the mole-fraction vector length differs from the component count."""


class IndexOutOfRange(IndexError):
    """Raised on direct departure-matrix access with an invalid index."""
