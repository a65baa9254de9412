"""Representation-preserving arithmetic on complex values.

Every operation accepts complex values of either representation or
plain real scalars and returns a new value.  The representation of the
result follows one rule:

    both operands Polar  ->  Polar
    anything else        ->  Rectangular

Scalars are lifted to ``Rectangular(x, 0)``, so a scalar operand always
yields a rectangular result.  Each operation reads whichever primitive is
cheapest for the job (rectangular components for addition, modulus and
phase for division and exponentiation).

Division by a zero-modulus value, the logarithm of zero and powers of a
zero base are not errors: they propagate ``inf``/``nan`` exactly as
float arithmetic does.  The only error is ``InvalidArgumentError`` for
inputs that are neither complex values nor real scalars.
"""
from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Union

from complex_value import (
    ComplexValue,
    InvalidArgumentError,
    Polar,
    Rectangular,
    Representation,
    is_operand,
)
from ieee import fdiv, fexp, flog, fpow

Operand = Union[ComplexValue, float, int]

I = Polar(1.0, math.pi / 2)
E = Rectangular(math.e, 0.0)

# Reduction identities.  Held in polar form so they never force a
# rectangular result on an all-polar argument list.
_ADDITIVE_IDENTITY = Polar(0.0, 0.0)
_MULTIPLICATIVE_IDENTITY = Polar(1.0, 0.0)


# ---------------------------------------------------------------------------
# Operand handling
# ---------------------------------------------------------------------------

def as_complex(value: Any) -> ComplexValue:
    """Return ``value`` as a complex value, lifting real scalars.

    Raises InvalidArgumentError for anything else (including ``None`` and
    ``bool``).
    """
    if isinstance(value, ComplexValue):
        return value
    if is_operand(value):
        return Rectangular(float(value), 0.0)
    raise InvalidArgumentError(
        "Input arguments need to be either a complex number or a real "
        f"number, got {type(value).__name__}"
    )


def _both_polar(a: ComplexValue, b: ComplexValue) -> bool:
    return (
        a.representation is Representation.POLAR
        and b.representation is Representation.POLAR
    )


def _collect(operands: Iterable[Any] | None) -> list[ComplexValue]:
    """Validate a whole argument list before any arithmetic happens."""
    if operands is None:
        raise InvalidArgumentError("The argument list must not be None.")
    try:
        items = iter(operands)
    except TypeError as e:
        raise InvalidArgumentError(
            "The arguments must be a sequence of complex or real numbers."
        ) from e
    values = [as_complex(v) for v in items]
    if not values:
        raise InvalidArgumentError("There has to be at least one argument.")
    return values


def _reduce(
    operands: Iterable[Any] | None,
    op: Callable[[ComplexValue, ComplexValue], ComplexValue],
    identity: ComplexValue,
) -> ComplexValue:
    acc = identity
    for z in _collect(operands):
        acc = op(acc, z)
    return acc


# ---------------------------------------------------------------------------
# Binary kernels (operands already lifted)
# ---------------------------------------------------------------------------

def _add(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    soln = Rectangular(a.real() + b.real(), a.imag() + b.imag())
    return soln.to_polar() if _both_polar(a, b) else soln


def _subtract(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    soln = Rectangular(a.real() - b.real(), a.imag() - b.imag())
    return soln.to_polar() if _both_polar(a, b) else soln


def _multiply(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    if _both_polar(a, b):
        return Polar(a.modulus() * b.modulus(), a.phase() + b.phase())
    return Rectangular(
        a.real() * b.real() - a.imag() * b.imag(),
        a.real() * b.imag() + a.imag() * b.real(),
    )


def _divide(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    soln = Polar(fdiv(a.modulus(), b.modulus()), a.phase() - b.phase())
    return soln if _both_polar(a, b) else soln.to_rectangular()


def _power(a: ComplexValue, b: ComplexValue) -> ComplexValue:
    # a^b = |a|^Re(b) * e^(-Im(b)*arg a)  at angle  Im(b)*ln|a| + Re(b)*arg a
    mod_a, arg_a = a.modulus(), a.phase()
    modulus = fpow(mod_a, b.real()) * fexp(-b.imag() * arg_a)
    phase = b.imag() * flog(mod_a) + b.real() * arg_a
    soln = Polar(modulus, phase)
    return soln if _both_polar(a, b) else soln.to_rectangular()


# ---------------------------------------------------------------------------
# Public operators
# ---------------------------------------------------------------------------

def add(*operands: Operand) -> ComplexValue:
    """Sum one or more complex values and/or real scalars, left to right."""
    return _reduce(operands, _add, _ADDITIVE_IDENTITY)


def add_all(operands: Iterable[Operand] | None) -> ComplexValue:
    """Sequence form of :func:`add`."""
    return _reduce(operands, _add, _ADDITIVE_IDENTITY)


def multiply(*operands: Operand) -> ComplexValue:
    """Multiply one or more complex values and/or real scalars, left to right."""
    return _reduce(operands, _multiply, _MULTIPLICATIVE_IDENTITY)


def multiply_all(operands: Iterable[Operand] | None) -> ComplexValue:
    """Sequence form of :func:`multiply`."""
    return _reduce(operands, _multiply, _MULTIPLICATIVE_IDENTITY)


def subtract(a: Operand, b: Operand) -> ComplexValue:
    """``a - b``, computed on rectangular components."""
    return _subtract(as_complex(a), as_complex(b))


def divide(a: Operand, b: Operand) -> ComplexValue:
    """``a / b``, computed in polar form.

    A zero-modulus divisor gives an infinite (or, for ``0/0``, NaN)
    modulus rather than raising.
    """
    return _divide(as_complex(a), as_complex(b))


def power(a: Operand, b: Operand) -> ComplexValue:
    """``a ** b`` on the principal branch of ``log a``.

    A zero base has no defined phase contribution and yields NaN
    components.
    """
    return _power(as_complex(a), as_complex(b))


def sqrt(z: Operand) -> ComplexValue:
    """Principal square root, ``z ** 0.5``."""
    return power(z, 0.5)


def exp(z: Operand) -> ComplexValue:
    return power(E, z)


# ---------------------------------------------------------------------------
# Transcendental functions
# ---------------------------------------------------------------------------

def sin(z: Operand) -> ComplexValue:
    """``(e^(iz) - e^(-iz)) / 2i``"""
    z1 = exp(multiply(I, z))
    z2 = exp(multiply(-1, I, z))
    return divide(subtract(z1, z2), multiply(2, I))


def cos(z: Operand) -> ComplexValue:
    """``(e^(iz) + e^(-iz)) / 2``"""
    z1 = exp(multiply(I, z))
    z2 = exp(multiply(-1, I, z))
    return divide(add(z1, z2), 2)


def tan(z: Operand) -> ComplexValue:
    """``sin(z) / cos(z)``; non-finite where ``cos(z)`` vanishes."""
    return divide(sin(z), cos(z))


def log(z: Operand) -> ComplexValue:
    """Principal natural logarithm ``ln|z| + i*arg(z)``.

    A polar argument gives a polar result.  ``log(0)`` has real part
    ``-inf``.
    """
    z = as_complex(z)
    soln = Rectangular(flog(z.modulus()), z.phase())
    if z.representation is Representation.POLAR:
        return soln.to_polar()
    return soln


def asin(z: Operand) -> ComplexValue:
    """``-i * ln(iz + sqrt(1 - z^2))``"""
    root = sqrt(subtract(1, power(z, 2)))
    return multiply(-1, I, log(add(multiply(I, z), root)))


def acos(z: Operand) -> ComplexValue:
    """``-i * ln(z + i*sqrt(1 - z^2))``"""
    root = sqrt(subtract(1, power(z, 2)))
    return multiply(-1, I, log(add(z, multiply(I, root))))


def atan(z: Operand) -> ComplexValue:
    """``ln((1 + iz) / (1 - iz)) / 2i``"""
    iz = multiply(I, z)
    return divide(log(divide(add(1, iz), subtract(1, iz))), multiply(I, 2))


# ---------------------------------------------------------------------------
# Roots of unity
# ---------------------------------------------------------------------------

def nth_roots_of_unity(n: int) -> list[Rectangular]:
    """The ``n`` points ``e^(2*pi*i*k/n)`` for ``k`` in ``0..n-1``, in order."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(f"n must be an integer, got {n!r}")
    if n <= 0:
        raise InvalidArgumentError(f"n must be positive, got {n}")
    return [Polar(1.0, 2 * math.pi * k / n).to_rectangular() for k in range(n)]
