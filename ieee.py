"""IEEE-754 float primitives.

Python's ``math`` module and the ``/`` and ``**`` operators raise on
division by zero, logarithm of zero, overflow and trigonometry of
infinities.  Complex arithmetic here is defined to propagate those cases
as ``inf``/``nan`` instead.  Division, logarithm and exponentiation go
through numpy with floating-point errors silenced and come back as a
plain ``float``; the trig helpers only guard the non-finite inputs.
"""
from __future__ import annotations

import math

import numpy as np


def fdiv(a: float, b: float) -> float:
    """``a / b``; a zero divisor gives ``±inf`` or ``nan``."""
    with np.errstate(all="ignore"):
        return float(np.true_divide(a, b))


def flog(x: float) -> float:
    """Natural logarithm; ``flog(0) == -inf``, negative input gives ``nan``."""
    with np.errstate(all="ignore"):
        return float(np.log(x))


def fpow(base: float, exponent: float) -> float:
    with np.errstate(all="ignore"):
        return float(np.power(float(base), float(exponent)))


def fexp(x: float) -> float:
    with np.errstate(all="ignore"):
        return float(np.exp(x))


def fsin(x: float) -> float:
    # math.sin raises on infinities; finite angles keep libm results so
    # that exact quarter-turn values (sin(pi/2) == 1.0) are preserved.
    if not math.isfinite(x):
        return math.nan
    return math.sin(x)


def fcos(x: float) -> float:
    if not math.isfinite(x):
        return math.nan
    return math.cos(x)
