"""Executable contract for the complex arithmetic layer.

Each operation is described as a collection of:
- preconditions: the numeric domain on which the checks below are meaningful
- postconditions: what the result must satisfy given admitted inputs
- error conditions: inputs that must raise a specific exception
- algebraic properties: relationships between operations that must hold

Numerical agreement is judged against Python's ``cmath`` with a relative
tolerance, never by exact float equality.  The contract is data: the
conformance tests and ``validation/counterexample_search.py`` iterate
over it instead of restating each predicate.

Layers
------
Precondition .. AlgebraicProperty   building blocks
OperationContract                   per-operation contract
ArithmeticContract                  every operation, keyed by name
build_contract()                    constructs the contract for a tolerance
"""
from __future__ import annotations

import cmath
from dataclasses import dataclass
from typing import Any, Callable

import arithmetic as ar
from complex_value import (
    EPSILON,
    ComplexValue,
    InvalidArgumentError,
    Rectangular,
    Representation,
    is_operand,
)

# Domain limits used by preconditions.
MIN_MODULUS = 1e-3     # below this a value counts as zero for division/log
DOMAIN_LIMIT = 10.0    # modulus bound for reference comparisons
EXPONENT_LIMIT = 4.0   # modulus bound for exponents and trig arguments
CUT_WIDTH = 1e-9       # half-width of the negative-real branch cut band
SINGULAR_GAP = 0.1     # distance kept from the poles of asin/acos/atan


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Precondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]      # (*inputs, result) -> bool


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free complex values the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationContract:
    name: str
    arity: int          # -1 for variadic
    operation: Callable[..., ComplexValue]
    preconditions: list[Precondition]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]

    def admits(self, *inputs: Any) -> bool:
        """True when every precondition holds for ``inputs``."""
        return all(pre.check(*inputs) for pre in self.preconditions)


@dataclass(frozen=True)
class ArithmeticContract:
    """Complete contract for the arithmetic layer at one tolerance."""

    tolerance: float
    operations: dict[str, OperationContract]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    @property
    def all_error_conditions(self) -> list[tuple[str, ErrorCondition]]:
        out: list[tuple[str, ErrorCondition]] = []
        for name, op in self.operations.items():
            for ec in op.error_conditions:
                out.append((name, ec))
        return out


# ---------------------------------------------------------------------------
# Helpers used inside the contract predicates
# ---------------------------------------------------------------------------

def close(actual: Any, expected: Any, tolerance: float = EPSILON) -> bool:
    """Relative closeness of two complex quantities.

    Accepts complex values, Python ``complex`` or real scalars.  Scales the
    tolerance by ``max(1, |expected|)``; any non-finite side compares
    unequal.
    """
    a, e = complex(actual), complex(expected)
    return abs(a - e) <= tolerance * max(1.0, abs(e))


def expected_representation(*operands: Any) -> Representation:
    """Polar only when every operand is a polar value."""
    if all(
        isinstance(v, ComplexValue) and v.representation is Representation.POLAR
        for v in operands
    ):
        return Representation.POLAR
    return Representation.RECTANGULAR


def _c(z: Any) -> complex:
    return complex(ar.as_complex(z))


def _product(values: Any) -> complex:
    out = complex(1, 0)
    for v in values:
        out *= v
    return out


def _finite(*zs: Any) -> bool:
    return all(cmath.isfinite(_c(z)) for z in zs)


def _within(limit: float) -> Callable[..., bool]:
    return lambda *zs: all(abs(_c(z)) <= limit for z in zs)


def _tiny(z: Any) -> bool:
    return abs(_c(z)) < MIN_MODULUS


def _off_branch_cut(z: Any) -> bool:
    c = _c(z)
    return not (c.real < 0 and abs(c.imag) < CUT_WIDTH)


def _away_from(*points: complex) -> Callable[[Any], bool]:
    return lambda z: all(abs(_c(z) - p) >= SINGULAR_GAP for p in points)


def _rejects_any(*args: Any) -> bool:
    return not all(is_operand(a) for a in args)


def _rejects_variadic(*args: Any) -> bool:
    return len(args) == 0 or _rejects_any(*args)


FINITE = Precondition("finite_inputs", "All inputs are finite", _finite)
BOUNDED = Precondition(
    "bounded_inputs", f"All inputs have modulus <= {DOMAIN_LIMIT}",
    _within(DOMAIN_LIMIT),
)
SMALL = Precondition(
    "small_inputs", f"All inputs have modulus <= {EXPONENT_LIMIT}",
    _within(EXPONENT_LIMIT),
)
NONZERO = Precondition(
    "nonzero_input", f"Input modulus >= {MIN_MODULUS}",
    lambda z: not _tiny(z),
)


def _invalid_operand(trigger: Callable[..., bool]) -> ErrorCondition:
    return ErrorCondition(
        "invalid_operand",
        "InvalidArgumentError when an input is neither complex nor real",
        trigger,
        InvalidArgumentError,
    )


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract(tolerance: float = EPSILON) -> ArithmeticContract:
    """Construct the full arithmetic contract for ``tolerance``."""
    tol = tolerance

    def representation_rule(*inputs: Any) -> bool:
        *operands, result = inputs
        return result.representation is expected_representation(*operands)

    REPRESENTATION = Postcondition(
        "representation",
        "Polar result exactly when every operand is polar",
        representation_rule,
    )

    # ------------------------------------------------------------------ add
    add_contract = OperationContract(
        name="add",
        arity=-1,
        operation=ar.add,
        preconditions=[FINITE, BOUNDED],
        postconditions=[
            REPRESENTATION,
            Postcondition(
                "result_correct", "Result equals the complex sum",
                lambda *inputs: close(
                    inputs[-1], sum(_c(z) for z in inputs[:-1]), tol
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "empty_arguments",
                "InvalidArgumentError when called with no arguments",
                lambda *args: len(args) == 0,
                InvalidArgumentError,
            ),
            _invalid_operand(_rejects_variadic),
        ],
        properties=[
            AlgebraicProperty(
                "commutativity", "add(a, b) == add(b, a)", 2,
                lambda a, b: close(ar.add(a, b), ar.add(b, a), tol),
            ),
            AlgebraicProperty(
                "identity", "add(z, 0+0i) == z", 1,
                lambda z: close(ar.add(z, Rectangular(0, 0)), z, tol),
            ),
            AlgebraicProperty(
                "associativity", "add(add(a, b), c) == add(a, add(b, c))", 3,
                lambda a, b, c: close(
                    ar.add(ar.add(a, b), c), ar.add(a, ar.add(b, c)), tol
                ),
            ),
            AlgebraicProperty(
                "variadic_fold", "add(a, b, c) == add(add(a, b), c)", 3,
                lambda a, b, c: close(ar.add(a, b, c), ar.add(ar.add(a, b), c), tol),
            ),
        ],
    )

    # ------------------------------------------------------------- subtract
    subtract_contract = OperationContract(
        name="subtract",
        arity=2,
        operation=ar.subtract,
        preconditions=[FINITE, BOUNDED],
        postconditions=[
            REPRESENTATION,
            Postcondition(
                "result_correct", "Result equals the complex difference",
                lambda a, b, result: close(result, _c(a) - _c(b), tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[
            AlgebraicProperty(
                "identity", "subtract(z, 0) == z", 1,
                lambda z: close(ar.subtract(z, 0), z, tol),
            ),
            AlgebraicProperty(
                "self_inverse", "subtract(z, z) == 0", 1,
                lambda z: close(ar.subtract(z, z), 0, tol),
            ),
            AlgebraicProperty(
                "add_inverse", "add(subtract(a, b), b) == a", 2,
                lambda a, b: close(ar.add(ar.subtract(a, b), b), a, tol),
            ),
        ],
    )

    # ------------------------------------------------------------- multiply
    multiply_contract = OperationContract(
        name="multiply",
        arity=-1,
        operation=ar.multiply,
        preconditions=[FINITE, BOUNDED],
        postconditions=[
            REPRESENTATION,
            Postcondition(
                "result_correct", "Result equals the complex product",
                lambda *inputs: close(
                    inputs[-1], _product(_c(z) for z in inputs[:-1]), tol
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "empty_arguments",
                "InvalidArgumentError when called with no arguments",
                lambda *args: len(args) == 0,
                InvalidArgumentError,
            ),
            _invalid_operand(_rejects_variadic),
        ],
        properties=[
            AlgebraicProperty(
                "commutativity", "multiply(a, b) == multiply(b, a)", 2,
                lambda a, b: close(ar.multiply(a, b), ar.multiply(b, a), tol),
            ),
            AlgebraicProperty(
                "identity", "multiply(z, 1) == z", 1,
                lambda z: close(ar.multiply(z, 1), z, tol),
            ),
            AlgebraicProperty(
                "zero", "multiply(z, 0) == 0", 1,
                lambda z: close(ar.multiply(z, 0), 0, tol),
            ),
            AlgebraicProperty(
                "inverse_law", "multiply(z, z.inverse()) == 1 for z != 0", 1,
                lambda z: _tiny(z) or close(ar.multiply(z, z.inverse()), 1, tol),
            ),
            AlgebraicProperty(
                "distributivity",
                "multiply(a, add(b, c)) == add(multiply(a, b), multiply(a, c))", 3,
                lambda a, b, c: close(
                    ar.multiply(a, ar.add(b, c)),
                    ar.add(ar.multiply(a, b), ar.multiply(a, c)),
                    tol,
                ),
            ),
        ],
    )

    # --------------------------------------------------------------- divide
    divide_contract = OperationContract(
        name="divide",
        arity=2,
        operation=ar.divide,
        preconditions=[FINITE, BOUNDED],
        postconditions=[
            REPRESENTATION,
            Postcondition(
                "result_correct",
                "Result equals the complex quotient (non-zero divisor)",
                lambda a, b, result: (
                    _tiny(b) or close(result, _c(a) / _c(b), tol)
                ),
            ),
            Postcondition(
                "zero_divisor_non_finite",
                "A zero-modulus divisor gives a non-finite result",
                lambda a, b, result: (
                    abs(_c(b)) != 0 or not result.is_finite()
                ),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[
            AlgebraicProperty(
                "identity", "divide(z, 1) == z", 1,
                lambda z: close(ar.divide(z, 1), z, tol),
            ),
            AlgebraicProperty(
                "self", "divide(z, z) == 1 for z != 0", 1,
                lambda z: _tiny(z) or close(ar.divide(z, z), 1, tol),
            ),
            AlgebraicProperty(
                "multiply_inverse", "multiply(divide(a, b), b) == a for b != 0", 2,
                lambda a, b: (
                    _tiny(b) or close(ar.multiply(ar.divide(a, b), b), a, tol)
                ),
            ),
        ],
    )

    # ---------------------------------------------------------------- power
    power_contract = OperationContract(
        name="power",
        arity=2,
        operation=ar.power,
        preconditions=[
            FINITE,
            Precondition(
                "base_in_domain",
                "Base is non-zero, bounded and off the negative real axis",
                lambda a, b: (
                    not _tiny(a) and abs(_c(a)) <= DOMAIN_LIMIT
                    and _off_branch_cut(a)
                ),
            ),
            Precondition(
                "small_exponent", f"Exponent modulus <= {EXPONENT_LIMIT}",
                lambda a, b: abs(_c(b)) <= EXPONENT_LIMIT,
            ),
        ],
        postconditions=[
            REPRESENTATION,
            Postcondition(
                "result_correct", "Result equals the principal power",
                lambda a, b, result: close(result, _c(a) ** _c(b), tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[
            AlgebraicProperty(
                "zero_exponent", "power(z, 0) == 1 for z != 0", 1,
                lambda z: _tiny(z) or close(ar.power(z, 0), 1, tol),
            ),
            AlgebraicProperty(
                "unit_exponent", "power(z, 1) == z for z != 0", 1,
                lambda z: _tiny(z) or close(ar.power(z, 1), z, tol),
            ),
            AlgebraicProperty(
                "square", "power(z, 2) == multiply(z, z) for z != 0", 1,
                lambda z: _tiny(z) or close(ar.power(z, 2), ar.multiply(z, z), tol),
            ),
        ],
    )

    # --------------------------------------------------------- conversions
    to_polar_contract = OperationContract(
        name="to_polar",
        arity=1,
        operation=lambda z: z.to_polar(),
        preconditions=[FINITE, BOUNDED],
        postconditions=[
            Postcondition(
                "representation", "Result is polar",
                lambda z, result: result.representation is Representation.POLAR,
            ),
            Postcondition(
                "normalized", "modulus() >= 0 and phase() in [-pi, pi]",
                lambda z, result: (
                    result.modulus() >= 0
                    and -cmath.pi <= result.phase() <= cmath.pi
                ),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "round_trip", "z.to_polar().to_rectangular() == z", 1,
                lambda z: close(z.to_polar().to_rectangular(), z, tol),
            ),
        ],
    )

    to_rectangular_contract = OperationContract(
        name="to_rectangular",
        arity=1,
        operation=lambda z: z.to_rectangular(),
        preconditions=[FINITE, BOUNDED],
        postconditions=[
            Postcondition(
                "representation", "Result is rectangular",
                lambda z, result: (
                    result.representation is Representation.RECTANGULAR
                ),
            ),
            Postcondition(
                "same_value", "Conversion does not change the value",
                lambda z, result: close(result, z, tol),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "round_trip",
                "z.to_rectangular().to_polar() == z for z != 0", 1,
                lambda z: _tiny(z) or close(z.to_rectangular().to_polar(), z, tol),
            ),
        ],
    )

    # ------------------------------------------------- conjugate / inverse
    conjugate_contract = OperationContract(
        name="conjugate",
        arity=1,
        operation=lambda z: z.conjugate(),
        preconditions=[FINITE, BOUNDED],
        postconditions=[
            Postcondition(
                "representation", "Conjugate keeps the representation",
                lambda z, result: result.representation is z.representation,
            ),
            Postcondition(
                "result_correct", "Result equals the complex conjugate",
                lambda z, result: close(result, _c(z).conjugate(), tol),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "involution", "z.conjugate().conjugate() == z", 1,
                lambda z: close(z.conjugate().conjugate(), z, tol),
            ),
            AlgebraicProperty(
                "norm", "multiply(z, z.conjugate()) == |z|^2", 1,
                lambda z: close(
                    ar.multiply(z, z.conjugate()), z.modulus() ** 2, tol
                ),
            ),
        ],
    )

    inverse_contract = OperationContract(
        name="inverse",
        arity=1,
        operation=lambda z: z.inverse(),
        preconditions=[FINITE, BOUNDED],
        postconditions=[
            Postcondition(
                "representation", "Inverse keeps the representation",
                lambda z, result: result.representation is z.representation,
            ),
            Postcondition(
                "result_correct", "Result equals 1/z for z != 0",
                lambda z, result: _tiny(z) or close(result, 1 / _c(z), tol),
            ),
            Postcondition(
                "zero_non_finite", "Inverse of zero is non-finite",
                lambda z, result: abs(_c(z)) != 0 or not result.is_finite(),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "involution", "z.inverse().inverse() == z for z != 0", 1,
                lambda z: _tiny(z) or close(z.inverse().inverse(), z, tol),
            ),
        ],
    )

    # ------------------------------------------------------ log / sqrt / exp
    log_contract = OperationContract(
        name="log",
        arity=1,
        operation=ar.log,
        preconditions=[
            FINITE, BOUNDED,
            Precondition(
                "principal_domain",
                "Non-zero and off the negative real axis",
                lambda z: not _tiny(z) and _off_branch_cut(z),
            ),
        ],
        postconditions=[
            Postcondition(
                "representation", "Result mirrors the input representation",
                lambda z, result: (
                    result.representation is expected_representation(z)
                ),
            ),
            Postcondition(
                "result_correct", "Result equals the principal logarithm",
                lambda z, result: close(result, cmath.log(_c(z)), tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[
            AlgebraicProperty(
                "exp_inverse", "exp(log(z)) == z for z != 0", 1,
                lambda z: _tiny(z) or close(ar.exp(ar.log(z)), z, tol),
            ),
        ],
    )

    sqrt_contract = OperationContract(
        name="sqrt",
        arity=1,
        operation=ar.sqrt,
        preconditions=[
            FINITE, BOUNDED,
            Precondition(
                "principal_domain",
                "Non-zero and off the negative real axis",
                lambda z: not _tiny(z) and _off_branch_cut(z),
            ),
        ],
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the principal square root",
                lambda z, result: close(result, cmath.sqrt(_c(z)), tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[
            AlgebraicProperty(
                "square", "multiply(sqrt(z), sqrt(z)) == z for z != 0", 1,
                lambda z: _tiny(z) or close(
                    ar.multiply(ar.sqrt(z), ar.sqrt(z)), z, tol
                ),
            ),
        ],
    )

    exp_contract = OperationContract(
        name="exp",
        arity=1,
        operation=ar.exp,
        preconditions=[FINITE, SMALL],
        postconditions=[
            Postcondition(
                "result_correct", "Result equals e^z",
                lambda z, result: close(result, cmath.exp(_c(z)), tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[],
    )

    # ---------------------------------------------------------------- trig
    def _small(z: Any) -> bool:
        return abs(_c(z)) <= EXPONENT_LIMIT

    sin_contract = OperationContract(
        name="sin",
        arity=1,
        operation=ar.sin,
        preconditions=[FINITE, SMALL],
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the complex sine",
                lambda z, result: close(result, cmath.sin(_c(z)), tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[
            AlgebraicProperty(
                "pythagorean", "add(sin(z)^2, cos(z)^2) == 1", 1,
                lambda z: not _small(z) or close(
                    ar.add(
                        ar.multiply(ar.sin(z), ar.sin(z)),
                        ar.multiply(ar.cos(z), ar.cos(z)),
                    ),
                    1, tol,
                ),
            ),
            AlgebraicProperty(
                "odd", "sin(-z) == -sin(z)", 1,
                lambda z: not _small(z) or close(
                    ar.sin(ar.multiply(-1, z)), ar.multiply(-1, ar.sin(z)), tol
                ),
            ),
        ],
    )

    cos_contract = OperationContract(
        name="cos",
        arity=1,
        operation=ar.cos,
        preconditions=[FINITE, SMALL],
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the complex cosine",
                lambda z, result: close(result, cmath.cos(_c(z)), tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[
            AlgebraicProperty(
                "even", "cos(-z) == cos(z)", 1,
                lambda z: not _small(z) or close(
                    ar.cos(ar.multiply(-1, z)), ar.cos(z), tol
                ),
            ),
        ],
    )

    tan_contract = OperationContract(
        name="tan",
        arity=1,
        operation=ar.tan,
        preconditions=[
            FINITE, SMALL,
            Precondition(
                "away_from_poles", "cos(z) is not close to zero",
                lambda z: abs(cmath.cos(_c(z))) >= SINGULAR_GAP,
            ),
        ],
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the complex tangent",
                lambda z, result: close(result, cmath.tan(_c(z)), tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[],
    )

    # ------------------------------------------------------ inverse trig
    away_from_unit_reals = _away_from(1, -1)
    away_from_unit_imags = _away_from(1j, -1j)

    asin_contract = OperationContract(
        name="asin",
        arity=1,
        operation=ar.asin,
        preconditions=[
            FINITE, SMALL,
            Precondition(
                "away_from_branch_points", "z is not close to +1 or -1",
                away_from_unit_reals,
            ),
            NONZERO,
        ],
        postconditions=[
            Postcondition(
                "inverts_sin", "sin(asin(z)) == z",
                lambda z, result: close(ar.sin(result), z, tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[],
    )

    acos_contract = OperationContract(
        name="acos",
        arity=1,
        operation=ar.acos,
        preconditions=[
            FINITE, SMALL,
            Precondition(
                "away_from_branch_points", "z is not close to +1 or -1",
                away_from_unit_reals,
            ),
            NONZERO,
        ],
        postconditions=[
            Postcondition(
                "inverts_cos", "cos(acos(z)) == z",
                lambda z, result: close(ar.cos(result), z, tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[],
    )

    atan_contract = OperationContract(
        name="atan",
        arity=1,
        operation=ar.atan,
        preconditions=[
            FINITE, SMALL,
            Precondition(
                "away_from_poles", "z is not close to +i or -i",
                away_from_unit_imags,
            ),
        ],
        postconditions=[
            Postcondition(
                "inverts_tan", "tan(atan(z)) == z",
                lambda z, result: close(ar.tan(result), z, tol),
            ),
        ],
        error_conditions=[_invalid_operand(_rejects_any)],
        properties=[],
    )

    contracts = [
        add_contract, subtract_contract, multiply_contract, divide_contract,
        power_contract, to_polar_contract, to_rectangular_contract,
        conjugate_contract, inverse_contract, log_contract, sqrt_contract,
        exp_contract, sin_contract, cos_contract, tan_contract,
        asin_contract, acos_contract, atan_contract,
    ]
    return ArithmeticContract(
        tolerance=tolerance,
        operations={c.name: c for c in contracts},
    )
