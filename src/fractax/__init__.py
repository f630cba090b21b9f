from fractax.core.errors import (
    FractionError,
    InexactConversion,
    InvalidFraction,
    UndefinedResult,
    UnsignedNegation,
)
from fractax.core.fraction import Fraction
from fractax.functional.arithmetic import divide, reciprocal, sign
from fractax.functional.conversion import denominator, numerator, to_float, to_fraction, to_integer
from fractax.functional.expression import fraction_expr, rewrite_divisions

__all__ = [
    "Fraction",
    "FractionError",
    "InexactConversion",
    "InvalidFraction",
    "UndefinedResult",
    "UnsignedNegation",
    "divide",
    "reciprocal",
    "sign",
    "to_fraction",
    "to_integer",
    "to_float",
    "numerator",
    "denominator",
    "fraction_expr",
    "rewrite_divisions",
]
