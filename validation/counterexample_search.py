"""Counterexample search -- discovers gaps in implementation or tests.

This module runs independently of the test suite.  It sweeps a grid of
sample values through the arithmetic contract and searches for:

1. Postcondition violations: admitted inputs where the result disagrees
   with the contract (wrong representation, wrong value).
2. Error condition violations: invalid inputs that should raise but
   don't (or raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   combination of samples.

The grid mixes rectangular values, their polar conversions, and polar
values stored with a negative modulus or an unwrapped angle.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import itertools
import logging
import math
import sys
from dataclasses import dataclass, field
from typing import Any

sys.path.insert(0, ".")

from complex_value import ComplexValue, Polar, Rectangular
from contract import ArithmeticContract, OperationContract, build_contract

logger = logging.getLogger(__name__)

GRID = (-2.0, -1.0, -0.5, 0.0, 0.5, 1.0, 2.0)

# inputs every operation must reject
INVALID_OPERANDS: tuple[Any, ...] = (None, "1+2i", True, [1.0, 2.0], {"re": 1.0})


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found -- all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Sample generation
# ---------------------------------------------------------------------------

def sample_values(grid: tuple[float, ...] = GRID) -> list[ComplexValue]:
    """Rectangular grid points, their polar forms, and unnormalized polars."""
    values: list[ComplexValue] = []
    for re, im in itertools.product(grid, repeat=2):
        rect = Rectangular(re, im)
        values.append(rect)
        values.append(rect.to_polar())
    for r, turns in itertools.product((-2.0, -0.5, 1.5), (-3, 1, 2)):
        values.append(Polar(r, math.pi / 3 + turns * 2 * math.pi))
    return values


def _argument_tuples(
    op: OperationContract, samples: list[ComplexValue], scalars: tuple[float, ...]
) -> list[tuple]:
    if op.arity == 1:
        return [(z,) for z in samples]
    # binary and variadic operations are swept pairwise, scalars included
    operands: list[Any] = list(samples) + list(scalars)
    return list(itertools.product(operands, repeat=2))


def _record(cxs: list[Counterexample], cx: Counterexample) -> None:
    logger.debug(
        "%s in %s for %s: %s", cx.category, cx.operation, cx.inputs, cx.description
    )
    cxs.append(cx)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    contract: ArithmeticContract,
    samples: list[ComplexValue],
) -> tuple[list[Counterexample], int]:
    """Evaluate every postcondition on every admitted argument tuple."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op in contract.operations.items():
        for args in _argument_tuples(op, samples, scalars=(0.0, 2.0, -1.5)):
            if not op.admits(*args):
                continue
            checks += 1
            try:
                result = op.operation(*args)
            except Exception as e:
                _record(cxs, Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=args,
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            for post in op.postconditions:
                if not post.check(*args, result):
                    _record(cxs, Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=args,
                        expected=post.description,
                        actual=f"result={result!r}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    contract: ArithmeticContract,
    samples: list[ComplexValue],
) -> tuple[list[Counterexample], int]:
    """Verify every error condition raises the declared exception."""
    cxs: list[Counterexample] = []
    checks = 0
    valid = samples[:3]

    for op_name, op in contract.operations.items():
        if op.arity == 1:
            candidates = [(bad,) for bad in INVALID_OPERANDS]
        else:
            candidates = [()] if op.arity == -1 else []
            for bad in INVALID_OPERANDS:
                for z in valid:
                    candidates.append((z, bad))
                    candidates.append((bad, z))

        for args in candidates:
            for ec in op.error_conditions:
                if not ec.trigger(*args):
                    continue
                checks += 1
                try:
                    result = op.operation(*args)
                    _record(cxs, Counterexample(
                        category="missing_error",
                        operation=op_name,
                        inputs=args,
                        expected=ec.exception.__name__,
                        actual=f"result={result!r}",
                        description=(
                            f"Error condition '{ec.name}' should have "
                            f"triggered but didn't"
                        ),
                    ))
                except ec.exception:
                    pass  # expected
                except Exception as e:
                    _record(cxs, Counterexample(
                        category="wrong_error",
                        operation=op_name,
                        inputs=args,
                        expected=ec.exception.__name__,
                        actual=f"{type(e).__name__}: {e}",
                        description=f"Wrong exception type for '{ec.name}'",
                    ))

    return cxs, checks


def search_property_violations(
    contract: ArithmeticContract,
    samples: list[ComplexValue],
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property over all sample combinations."""
    cxs: list[Counterexample] = []
    checks = 0

    # arity-3 properties would be cubic in the grid; sweep a subset
    triples = samples[::7]

    for op_name, prop in contract.all_properties:
        pool = triples if prop.arity >= 3 else samples
        for args in itertools.product(pool, repeat=prop.arity):
            checks += 1
            if not prop.check(*args):
                _record(cxs, Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=args,
                    expected=prop.description,
                    actual="property does not hold",
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(
    tolerance: float,
    samples: list[ComplexValue] | None = None,
) -> SearchReport:
    """Run the complete counterexample search at one tolerance."""
    contract = build_contract(tolerance)
    if samples is None:
        samples = sample_values()
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(contract, samples)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    logger.info(
        "tolerance %g: %d checks, %d counterexamples",
        tolerance, report.checks_run, len(report.counterexamples),
    )
    return report


def main() -> None:
    """Run the counterexample search at the default and a tighter tolerance."""
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    all_passed = True
    for tolerance in (1e-6, 1e-9):
        print(f"\n--- Tolerance: {tolerance:g} ---")
        report = run_search(tolerance)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL TOLERANCES PASSED")
    else:
        print("SOME TOLERANCES HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
