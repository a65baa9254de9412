"""Complex values in rectangular and polar form.

Both representations implement the same capability set (``real``,
``imag``, ``modulus``, ``phase``, ``conjugate``, ``inverse``,
``to_rectangular``, ``to_polar``) and are immutable once constructed.
Which one a caller holds matters only to the arithmetic layer, which
reads the ``representation`` discriminant to decide the form of its
result (see ``arithmetic.py``).

Layers
------
Representation   discriminant carried by every value
ComplexValue     abstract capability set, tolerance equality, operators
Rectangular      (re, im) value
Polar            (r, theta) value; r may be negative, theta unwrapped
"""
from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from ieee import fcos, fdiv, fsin

# Two values are equal when both components differ by less than this.
EPSILON = 1e-6

TAU = 2 * math.pi


class InvalidArgumentError(ValueError):
    """Raised when an input is neither a complex value nor a real scalar."""


class Representation(str, Enum):
    RECTANGULAR = "rectangular"
    POLAR = "polar"


def is_operand(value: Any) -> bool:
    """True for complex values and real scalars (``bool`` excluded)."""
    if isinstance(value, ComplexValue):
        return True
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _real_field(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{name} must be a real number, got {value!r}")
    return float(value)


def wrap_angle(angle: float) -> float:
    """Bring ``angle`` into [-pi, pi] by whole turns.

    Angles already inside the interval, including both endpoints, are
    returned unchanged.  Non-finite angles give ``nan``.
    """
    if not math.isfinite(angle):
        return math.nan
    if angle > math.pi:
        angle -= TAU * math.ceil((angle - math.pi) / TAU)
    elif angle < -math.pi:
        angle += TAU * math.ceil((-math.pi - angle) / TAU)
    # rounding in the shift can land one ulp outside
    return max(-math.pi, min(math.pi, angle))


# ---------------------------------------------------------------------------
# Capability set
# ---------------------------------------------------------------------------

class ComplexValue(ABC):
    """A complex number in either representation."""

    representation: ClassVar[Representation]

    @abstractmethod
    def real(self) -> float: ...

    @abstractmethod
    def imag(self) -> float: ...

    @abstractmethod
    def modulus(self) -> float:
        """Non-negative magnitude."""

    @abstractmethod
    def phase(self) -> float:
        """Angle in radians, in [-pi, pi]."""

    @abstractmethod
    def conjugate(self) -> ComplexValue: ...

    @abstractmethod
    def inverse(self) -> ComplexValue:
        """Multiplicative inverse; non-finite for a zero-modulus value."""

    @abstractmethod
    def to_rectangular(self) -> Rectangular: ...

    @abstractmethod
    def to_polar(self) -> Polar: ...

    def is_finite(self) -> bool:
        return math.isfinite(self.real()) and math.isfinite(self.imag())

    # -- equality -----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComplexValue):
            return NotImplemented
        return (
            abs(self.real() - other.real()) < EPSILON
            and abs(self.imag() - other.imag()) < EPSILON
        )

    # tolerance equality is not transitive, so values cannot be hashed
    __hash__ = None  # type: ignore[assignment]

    # -- conversions --------------------------------------------------------

    def __complex__(self) -> complex:
        return complex(self.real(), self.imag())

    def __abs__(self) -> float:
        return self.modulus()

    # -- operator sugar (delegates to the arithmetic layer) -----------------

    def __add__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.add(self, other)

    def __radd__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.add(other, self)

    def __sub__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.subtract(self, other)

    def __rsub__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.subtract(other, self)

    def __mul__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.multiply(self, other)

    def __rmul__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.multiply(other, self)

    def __truediv__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.divide(self, other)

    def __rtruediv__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.divide(other, self)

    def __pow__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.power(self, other)

    def __rpow__(self, other: Any) -> ComplexValue:
        if not is_operand(other):
            return NotImplemented
        return arithmetic.power(other, self)


# ---------------------------------------------------------------------------
# Rectangular
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Rectangular(ComplexValue):
    """``re + im*i``."""

    re: float
    im: float

    representation: ClassVar[Representation] = Representation.RECTANGULAR

    def __post_init__(self) -> None:
        object.__setattr__(self, "re", _real_field("re", self.re))
        object.__setattr__(self, "im", _real_field("im", self.im))

    def real(self) -> float:
        return self.re

    def imag(self) -> float:
        return self.im

    def modulus(self) -> float:
        return math.hypot(self.re, self.im)

    def phase(self) -> float:
        """Quadrant-adjusted ``atan(im / re)``.

        The imaginary axis (``re == 0``) is resolved to ``±pi/2`` by the
        sign of ``im``; ``-0.0`` counts as zero, so ``re = -0.0`` never
        takes the left-half-plane branch.
        """
        if self.re < 0:
            if self.im >= 0:
                return math.atan(self.im / self.re) + math.pi
            return math.atan(self.im / self.re) - math.pi
        if self.re == 0:
            if self.im == 0:
                return 0.0
            return math.copysign(math.pi / 2, self.im)
        return math.atan(self.im / self.re)

    def conjugate(self) -> Rectangular:
        return Rectangular(self.re, -self.im)

    def inverse(self) -> Rectangular:
        mod_sq = self.re * self.re + self.im * self.im
        return Rectangular(fdiv(self.re, mod_sq), fdiv(-self.im, mod_sq))

    def to_rectangular(self) -> Rectangular:
        return self

    def to_polar(self) -> Polar:
        return Polar(self.modulus(), self.phase())

    def __neg__(self) -> Rectangular:
        return Rectangular(-self.re, -self.im)

    def __str__(self) -> str:
        """``"<re>+<im>i"``, or ``"<re>-<|im|>i"`` when ``im`` is negative.

        Components are written with ``repr(float)``: ``1e-07``, ``inf`` and
        ``nan`` rather than ``1.0E-7``, ``Infinity`` and ``NaN``.
        """
        if self.im < 0:
            return f"{self.re}-{-self.im}i"
        return f"{self.re}+{self.im}i"


# ---------------------------------------------------------------------------
# Polar
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Polar(ComplexValue):
    """``r * e^(i*theta)``.

    ``r`` and ``theta`` are stored exactly as given: ``r`` may be negative
    and ``theta`` may lie outside [-pi, pi].  ``modulus()`` and ``phase()``
    derive the normalized pair on every call without touching the fields.
    """

    r: float
    theta: float

    representation: ClassVar[Representation] = Representation.POLAR

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", _real_field("r", self.r))
        object.__setattr__(self, "theta", _real_field("theta", self.theta))

    def real(self) -> float:
        # exact zero at quarter turns instead of r * 6.1e-17
        if abs(fsin(self.theta)) == 1:
            return 0.0
        return self.r * fcos(self.theta)

    def imag(self) -> float:
        if abs(fcos(self.theta)) == 1:
            return 0.0
        return self.r * fsin(self.theta)

    def modulus(self) -> float:
        return abs(self.r)

    def phase(self) -> float:
        if self.r == 0:
            return 0.0
        angle = self.theta + math.pi if self.r < 0 else self.theta
        return wrap_angle(angle)

    def conjugate(self) -> Polar:
        return Polar(self.r, -self.theta)

    def inverse(self) -> Polar:
        return Polar(fdiv(1.0, self.modulus()), -self.phase())

    def to_rectangular(self) -> Rectangular:
        return Rectangular(self.real(), self.imag())

    def to_polar(self) -> Polar:
        return self

    def __neg__(self) -> Polar:
        return Polar(-self.r, self.theta)

    def __str__(self) -> str:
        """``"<modulus>e^<phase>i"`` from the normalized pair, float repr."""
        return f"{self.modulus()}e^{self.phase()}i"


# Operator sugar resolves through the arithmetic layer, which imports this
# module; bind it once both are defined.
import arithmetic  # noqa: E402
