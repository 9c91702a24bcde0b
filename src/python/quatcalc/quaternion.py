"""
===============================================================================
QUATCALC - Quaternion Value Type
===============================================================================

Immutable quaternion implementation with the full algebraic operation set
(sum, difference, Hamilton product, scaling, conjugate, opposite, inverse,
left/right division, symmetric dot product, norm) plus a compact text
format that survives a format -> parse round trip.

Convention
----------
Components are stored scalar-first:

    q = (r, i, j, k) = r + i*i_hat + j*j_hat + k*k_hat

No unit-norm constraint is imposed: all four components are independent
real numbers, stored exactly as given.

Tolerance
---------
All approximate comparisons (zero test, equality) use the single absolute
per-component threshold EPS from quatcalc.constants. Tolerance equality is
NOT transitive: a == b and b == c within EPS does not imply a == c.

Hashing
-------
The hash is computed from the raw component values. Two quaternions that
compare equal within EPS but differ in their bits may therefore land in
different hash buckets. Use them as dict keys / set members only when the
keys are produced by identical computations.

Text format
-----------
    "1.00+2.00i-3.00j+4.00k"

Real part first, then i, j, k, each with exactly two decimals. Imaginary
parts always carry an explicit sign so the form can be parsed back.

===============================================================================
"""

import logging
import numbers
from typing import Iterator, Optional, Union

import numpy as np

from quatcalc.constants import EPS, FORMAT_DECIMALS, TOKEN_PATTERN


logger = logging.getLogger(__name__)


class QuaternionFormatError(ValueError):
    """Raised by strict parsing when text is not a well-formed quaternion."""


class Quaternion:
    """
    Immutable quaternion r + i*i_hat + j*j_hat + k*k_hat.

    Every operation returns a new instance; neither ``self`` nor the
    operand is ever modified. The backing array is read-only and attribute
    assignment is refused.

    Attributes
    ----------
    r : float
        Real (scalar) part.
    i : float
        First imaginary component.
    j : float
        Second imaginary component.
    k : float
        Third imaginary component.

    Examples
    --------
    >>> q1 = Quaternion(0.0, 1.0, 0.0, 0.0)
    >>> q2 = Quaternion(0.0, 0.0, 1.0, 0.0)
    >>> str(q1.times(q2))
    '0.00+0.00i+0.00j+1.00k'
    >>> str(q2.times(q1))
    '0.00+0.00i+0.00j-1.00k'
    """

    EPS = EPS

    def __init__(self, r: float, i: float, j: float, k: float) -> None:
        q = np.array([r, i, j, k], dtype=np.float64)
        q.flags.writeable = False
        object.__setattr__(self, '_q', q)

    def __setattr__(self, name, value):
        raise AttributeError(
            f"Quaternion is immutable; cannot set attribute '{name}'"
        )

    def __delattr__(self, name):
        raise AttributeError(
            f"Quaternion is immutable; cannot delete attribute '{name}'"
        )

    # =========================================================================
    # PROPERTIES - Read access to quaternion components
    # =========================================================================

    @property
    def r(self) -> float:
        """Real (scalar) part of the quaternion."""
        return float(self._q[0])

    @property
    def i(self) -> float:
        """First imaginary component (i-axis)."""
        return float(self._q[1])

    @property
    def j(self) -> float:
        """Second imaginary component (j-axis)."""
        return float(self._q[2])

    @property
    def k(self) -> float:
        """Third imaginary component (k-axis)."""
        return float(self._q[3])

    @property
    def vector(self) -> np.ndarray:
        """Imaginary part [i, j, k] as a new 3-element array."""
        return self._q[1:4].copy()

    @property
    def components(self) -> np.ndarray:
        """
        Full quaternion as a 4-element numpy array [r, i, j, k].

        Returns
        -------
        np.ndarray
            Writable copy of the internal component array.
        """
        return self._q.copy()

    # =========================================================================
    # STATIC FACTORY METHODS
    # =========================================================================

    @staticmethod
    def zero() -> 'Quaternion':
        """The additive identity (0, 0, 0, 0)."""
        return Quaternion(0.0, 0.0, 0.0, 0.0)

    @staticmethod
    def identity() -> 'Quaternion':
        """The multiplicative identity (1, 0, 0, 0)."""
        return Quaternion(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_string(text: str, strict: bool = False) -> 'Quaternion':
        """
        Parse a quaternion from its text form.

        See parse_quaternion() for the grammar and the strict/lenient
        behaviour.
        """
        return parse_quaternion(text, strict=strict)

    # =========================================================================
    # INTERNAL HELPERS
    # =========================================================================

    def _norm_squared(self) -> float:
        r, i, j, k = self.r, self.i, self.j, self.k
        return r * r + i * i + j * j + k * k

    # =========================================================================
    # PREDICATES
    # =========================================================================

    def is_zero(self) -> bool:
        """
        Test whether the quaternion is (close to) zero.

        Returns
        -------
        bool
            True if every component satisfies |c| < EPS.
        """
        return bool(np.all(np.abs(self._q) < self.EPS))

    # =========================================================================
    # UNARY OPERATIONS
    # =========================================================================

    def conjugate(self) -> 'Quaternion':
        """
        Return the quaternion conjugate.

        conjugate(a + b*i + c*j + d*k) = a - b*i - c*j - d*k

        Returns
        -------
        Quaternion
            The conjugate quaternion.
        """
        return Quaternion(self.r, -self.i, -self.j, -self.k)

    def opposite(self) -> 'Quaternion':
        """Return -self: all four components negated."""
        return Quaternion(-self.r, -self.i, -self.j, -self.k)

    def norm(self) -> float:
        """
        Euclidean norm of the quaternion viewed as a 4-vector.

        Returns
        -------
        float
            sqrt(r^2 + i^2 + j^2 + k^2), always non-negative.
        """
        return float(np.sqrt(self._norm_squared()))

    def inverse(self) -> 'Quaternion':
        """
        Return the multiplicative inverse.

        With n = r^2 + i^2 + j^2 + k^2:

            1 / (r + i*i_hat + j*j_hat + k*k_hat) = (r/n, -i/n, -j/n, -k/n)

        so that self * self.inverse() is the identity.

        Returns
        -------
        Quaternion
            The inverse quaternion.

        Raises
        ------
        ZeroDivisionError
            If n is exactly 0.0. The check is an exact floating-point
            comparison, not an EPS test: tiny non-zero quaternions still
            have an inverse.
        """
        n = self._norm_squared()
        if n == 0.0:
            raise ZeroDivisionError("square of quaternion equals 0")
        return Quaternion(self.r / n, -self.i / n, -self.j / n, -self.k / n)

    def copy(self) -> 'Quaternion':
        """Return an independent quaternion with identical components."""
        return Quaternion(self.r, self.i, self.j, self.k)

    # =========================================================================
    # BINARY OPERATIONS
    # =========================================================================

    def plus(self, other: 'Quaternion') -> 'Quaternion':
        """
        Component-wise sum.

        (a1+b1i+c1j+d1k) + (a2+b2i+c2j+d2k) =
            (a1+a2) + (b1+b2)i + (c1+c2)j + (d1+d2)k
        """
        q = self._q + other._q
        return Quaternion(q[0], q[1], q[2], q[3])

    def minus(self, other: 'Quaternion') -> 'Quaternion':
        """Component-wise difference self - other."""
        q = self._q - other._q
        return Quaternion(q[0], q[1], q[2], q[3])

    def times(self, other: Union['Quaternion', float]) -> 'Quaternion':
        """
        Multiply by a quaternion (Hamilton product) or by a real scalar.

        Quaternion multiplication is NOT commutative: ``a.times(b)``
        computes a * b. Callers that need b * a must write ``b.times(a)``.

        The Hamilton product formula is:

            (a1 + b1*i + c1*j + d1*k) * (a2 + b2*i + c2*j + d2*k) =

            (a1*a2 - b1*b2 - c1*c2 - d1*d2) +
            (a1*b2 + b1*a2 + c1*d2 - d1*c2) i +
            (a1*c2 - b1*d2 + c1*a2 + d1*b2) j +
            (a1*d2 + b1*c2 - c1*b2 + d1*a2) k

        Parameters
        ----------
        other : Quaternion or real number
            The right-hand factor, or a scale coefficient applied to all
            four components.

        Returns
        -------
        Quaternion
            The product self * other.

        Raises
        ------
        TypeError
            If other is neither a Quaternion nor a real number.
        """
        if isinstance(other, Quaternion):
            return self._hamilton(other)
        if isinstance(other, numbers.Real):
            q = self._q * float(other)
            return Quaternion(q[0], q[1], q[2], q[3])
        raise TypeError(
            f"Cannot multiply Quaternion by {type(other).__name__}"
        )

    def _hamilton(self, other: 'Quaternion') -> 'Quaternion':
        # Extract components for clarity
        a1, b1, c1, d1 = self.r, self.i, self.j, self.k
        a2, b2, c2, d2 = other.r, other.i, other.j, other.k

        r = a1 * a2 - b1 * b2 - c1 * c2 - d1 * d2
        i = a1 * b2 + b1 * a2 + c1 * d2 - d1 * c2
        j = a1 * c2 - b1 * d2 + c1 * a2 + d1 * b2
        k = a1 * d2 + b1 * c2 - c1 * b2 + d1 * a2

        return Quaternion(r, i, j, k)

    def divide_by_right(self, other: 'Quaternion') -> 'Quaternion':
        """
        Right division: self * other^-1.

        Raises
        ------
        ZeroDivisionError
            If other is the zero quaternion.
        """
        return self.times(other.inverse())

    def divide_by_left(self, other: 'Quaternion') -> 'Quaternion':
        """
        Left division: other^-1 * self.

        Raises
        ------
        ZeroDivisionError
            If other is the zero quaternion.
        """
        return other.inverse().times(self)

    def dot_mult(self, other: 'Quaternion') -> 'Quaternion':
        """
        Symmetric dot product of two quaternions.

            dot_mult(p, q) = 1/2 * (p * conj(q) + q * conj(p))

        The real part of the result is the 4-vector dot product of p and q.
        The result is commutative by construction. It is computed through
        the Hamilton product and sum, not a closed-form shortcut, so the
        floating-point result is reproducible operation by operation.
        """
        first = self.times(other.conjugate())
        second = other.times(self.conjugate())
        return first.plus(second).times(0.5)

    def equals(self, other: object) -> bool:
        """
        Tolerance-based equality.

        Parameters
        ----------
        other : object
            Value to compare against.

        Returns
        -------
        bool
            True if other is this very object, or a Quaternion whose
            components all lie within EPS of this one's. False for any
            non-Quaternion.
        """
        if self is other:
            return True
        if not isinstance(other, Quaternion):
            return False
        return approx_equal(self, other, self.EPS)

    # =========================================================================
    # OPERATOR OVERLOADS
    # =========================================================================

    def __add__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.plus(other)
        return NotImplemented

    def __sub__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.minus(other)
        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        return self.opposite()

    def __mul__(self, other: Union['Quaternion', float]) -> 'Quaternion':
        """
        Multiplication operator.

        - Quaternion * Quaternion -> Hamilton product
        - Quaternion * scalar -> component-wise scaling

        There is deliberately no division operator; use divide_by_right()
        or divide_by_left() so the order is visible at the call site.
        """
        if isinstance(other, (Quaternion, numbers.Real)):
            return self.times(other)
        return NotImplemented

    def __rmul__(self, other: float) -> 'Quaternion':
        """Right-multiplication by a scalar: scalar * Quaternion."""
        if isinstance(other, numbers.Real):
            return self.times(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Quaternion):
            return NotImplemented
        return approx_equal(self, other, self.EPS)

    def __hash__(self) -> int:
        """Hash of the raw components (not tolerance-aware)."""
        return hash((self.r, self.i, self.j, self.k))

    def __iter__(self) -> Iterator[float]:
        return iter((self.r, self.i, self.j, self.k))

    def __copy__(self) -> 'Quaternion':
        return self.copy()

    def __deepcopy__(self, memo: Optional[dict] = None) -> 'Quaternion':
        return self.copy()

    def __reduce__(self):
        return (Quaternion, (self.r, self.i, self.j, self.k))

    def __repr__(self) -> str:
        """
        Unambiguous string representation for debugging.

        Format: Quaternion(r=..., i=..., j=..., k=...)
        """
        return (f"Quaternion(r={self.r!r}, i={self.i!r}, "
                f"j={self.j!r}, k={self.k!r})")

    def __str__(self) -> str:
        """Canonical text form, e.g. '1.00+2.00i-3.00j+4.00k'."""
        return format_quaternion(self)


# =============================================================================
# MODULE-LEVEL FUNCTIONS
# =============================================================================

def approx_equal(a: Quaternion, b: Quaternion, tol: float = EPS) -> bool:
    """
    Approximate equality over R^4 with an absolute per-component threshold.

    Parameters
    ----------
    a, b : Quaternion
        Values to compare.
    tol : float
        Largest accepted |a_c - b_c| for each component c.

    Returns
    -------
    bool
        True if all four component differences are <= tol.
    """
    return bool(np.all(np.abs(a._q - b._q) <= tol))


def format_quaternion(q: Quaternion) -> str:
    """
    Format a quaternion as ``"<r>±<i>i±<j>j±<k>k"``.

    Each component gets exactly FORMAT_DECIMALS fixed-point digits. The
    real part is signed only when negative; the imaginary parts are always
    signed, which keeps the output parseable by parse_quaternion().
    """
    d = FORMAT_DECIMALS
    r, i, j, k = q
    return f"{r:.{d}f}{i:+.{d}f}i{j:+.{d}f}j{k:+.{d}f}k"


def parse_quaternion(text: str, strict: bool = False) -> Quaternion:
    """
    Parse a quaternion from text, the inverse of format_quaternion().

    Tokens of the form ``-?digits[.digits][i|j|k]`` are scanned left to
    right. A bare number sets the real part; a number followed by i, j or k
    sets that imaginary part. Components that never appear are 0.0, and
    when a component appears more than once the last occurrence wins.

    Parameters
    ----------
    text : str
        Text to parse, typically produced by format_quaternion().
    strict : bool, optional
        If False (default), parsing never fails: characters between tokens
        are ignored and text without any token yields the zero quaternion.
        If True, the text (surrounding whitespace stripped) must consist
        only of tokens joined by nothing or a single '+', with each
        component given at most once.

    Returns
    -------
    Quaternion
        The parsed quaternion.

    Raises
    ------
    QuaternionFormatError
        Only in strict mode, if the text is not a well-formed quaternion.
    """
    values = {None: 0.0, 'i': 0.0, 'j': 0.0, 'k': 0.0}
    seen = set()
    body = text.strip() if strict else text
    position = 0

    for match in TOKEN_PATTERN.finditer(body):
        number, unit = match.group(1), match.group(2)
        if strict:
            gap = body[position:match.start()]
            if gap not in ('', '+') or (gap == '+' and number.startswith('-')):
                _reject(text, f"unexpected characters {gap!r} at offset {position}")
            if unit in seen:
                _reject(text, f"component '{unit or 'real'}' given more than once")
        seen.add(unit)
        values[unit] = float(number)
        position = match.end()

    if strict and body[position:]:
        _reject(text, f"unexpected trailing characters {body[position:]!r}")

    if not seen:
        if strict:
            _reject(text, "no numeric component found")
        logger.debug("No quaternion components in %r; using zero", text)

    return Quaternion(values[None], values['i'], values['j'], values['k'])


def _reject(text: str, reason: str) -> None:
    logger.debug("Rejected quaternion text %r: %s", text, reason)
    raise QuaternionFormatError(f"Invalid quaternion {text!r}: {reason}")
