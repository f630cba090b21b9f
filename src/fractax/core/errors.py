class FractionError(ArithmeticError):
    """Base class of all errors raised by fraction construction, arithmetic and conversion."""


class InvalidFraction(FractionError, ValueError):
    """Raised for 0/0 or for a component equal to the minimum of a fixed-width signed integer type."""


class UnsignedNegation(FractionError, TypeError):
    """Raised when negating a fraction backed by an unsigned integer type."""


class UndefinedResult(FractionError):
    """Raised for arithmetic without a defined value, e.g. inf + (-inf) or 0 * inf."""


class InexactConversion(FractionError, ValueError):
    """Raised when a value cannot be represented exactly in the requested type."""
