"""Exception types shared across the package."""


class BincovError(Exception):
    """Base class for all errors raised by bincov."""


class ConfigurationError(BincovError, ValueError):
    """Invalid experiment parameters.

    Raised when a condition or simulation config is constructed with
    values outside their valid range. Always fatal for the run.
    """


class NumericalDomainError(BincovError, ValueError):
    """An interval could not be computed for the given inputs.

    Raised by the interval estimators for out-of-range arguments and when
    a quantile function is evaluated outside its domain. The coverage
    accumulator counts these as failures instead of propagating them.
    """
