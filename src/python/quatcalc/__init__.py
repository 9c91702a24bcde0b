"""
===============================================================================
QUATCALC - Quaternion Algebra Package
===============================================================================
Immutable quaternion value type with its text codec and a small calculator.

Submodules:
    constants   -- Shared tolerance (EPS) and text-format constants
    quaternion  -- Quaternion class, approximate equality, format/parse
    main        -- Command-line calculator (quatcalc)
===============================================================================
"""

from quatcalc.constants import EPS
from quatcalc.quaternion import (
    Quaternion,
    QuaternionFormatError,
    approx_equal,
    format_quaternion,
    parse_quaternion,
)

__all__ = [
    'EPS',
    'Quaternion',
    'QuaternionFormatError',
    'approx_equal',
    'format_quaternion',
    'parse_quaternion',
]

__version__ = '0.1.0'
