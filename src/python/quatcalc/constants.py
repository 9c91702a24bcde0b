"""
===============================================================================
QUATCALC - Numeric and Text-Format Constants
===============================================================================
Central repository for the constants shared by the quaternion value type and
its text codec. The tolerance belongs to the type, not to instances: every
approximate comparison (zero test, equality) reads the same EPS.
===============================================================================
"""

import re


# =============================================================================
# TOLERANCES
# =============================================================================
EPS = 0.001                            # Absolute per-component tolerance

# =============================================================================
# TEXT FORMAT
# =============================================================================
FORMAT_DECIMALS = 2                    # Fixed-point digits per component

# One signed number of ASCII digits, optionally followed by an imaginary
# unit letter. A bare number is the real part.
TOKEN_PATTERN = re.compile(r'(-?\d+(?:\.\d+)?)([ijk])?', re.ASCII)
