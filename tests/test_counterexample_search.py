"""Tests for the standalone counterexample search."""

from __future__ import annotations

import dataclasses

from complex_value import Polar, Rectangular
from contract import ArithmeticContract, build_contract
from validation.counterexample_search import (
    Counterexample,
    SearchReport,
    run_search,
    sample_values,
    search_error_condition_violations,
    search_postcondition_violations,
    search_property_violations,
)

SMALL_GRID = (-1.0, 0.0, 1.0)


def _with_operation(contract: ArithmeticContract, name: str, fn) -> ArithmeticContract:
    ops = dict(contract.operations)
    ops[name] = dataclasses.replace(ops[name], operation=fn)
    return ArithmeticContract(tolerance=contract.tolerance, operations=ops)


class TestSampleValues:

    def test_both_representations(self):
        samples = sample_values(SMALL_GRID)
        assert any(isinstance(z, Rectangular) for z in samples)
        assert any(isinstance(z, Polar) for z in samples)

    def test_includes_unnormalized_polars(self):
        samples = sample_values(SMALL_GRID)
        assert any(isinstance(z, Polar) and z.r < 0 for z in samples)
        assert any(isinstance(z, Polar) and abs(z.theta) > 4 for z in samples)

    def test_size(self):
        # every grid point twice, plus nine unnormalized polars
        assert len(sample_values(SMALL_GRID)) == 2 * 9 + 9


class TestSearch:

    def test_implementation_passes(self):
        report = run_search(1e-6, sample_values(SMALL_GRID))
        assert report.passed, report.summary()
        assert report.checks_run > 0

    def test_broken_operation_detected(self):
        contract = _with_operation(
            build_contract(), "add", lambda *args: Rectangular(0, 0)
        )
        cxs, checks = search_postcondition_violations(
            contract, sample_values(SMALL_GRID)
        )
        assert checks > 0
        assert any(
            cx.operation == "add" and cx.category == "postcondition_violation"
            for cx in cxs
        )

    def test_missing_error_detected(self):
        contract = _with_operation(
            build_contract(), "subtract", lambda a, b: Rectangular(0, 0)
        )
        cxs, _ = search_error_condition_violations(
            contract, sample_values(SMALL_GRID)
        )
        assert any(
            cx.operation == "subtract" and cx.category == "missing_error"
            for cx in cxs
        )

    def test_wrong_error_detected(self):
        def raises_type_error(z):
            raise TypeError("unsupported")

        contract = _with_operation(build_contract(), "log", raises_type_error)
        cxs, _ = search_error_condition_violations(
            contract, sample_values(SMALL_GRID)
        )
        assert any(
            cx.operation == "log" and cx.category == "wrong_error" for cx in cxs
        )

    def test_unexpected_error_detected(self):
        def explodes(z):
            raise RuntimeError("boom")

        contract = _with_operation(build_contract(), "exp", explodes)
        cxs, _ = search_postcondition_violations(
            contract, sample_values(SMALL_GRID)
        )
        assert any(cx.category == "unexpected_error" for cx in cxs)

    def test_properties_pass(self):
        cxs, checks = search_property_violations(
            build_contract(), sample_values(SMALL_GRID)
        )
        assert cxs == []
        assert checks > 0


class TestReport:

    def test_empty_report(self):
        report = SearchReport()
        assert report.passed
        assert "No counterexamples found" in report.summary()

    def test_report_lists_counterexamples(self):
        report = SearchReport(checks_run=3)
        report.counterexamples.append(
            Counterexample(
                category="property_violation",
                operation="add",
                inputs=(Rectangular(1, 0),),
                expected="add(z, 0+0i) == z",
                actual="property does not hold",
                description="Property 'identity' violated",
            )
        )
        text = report.summary()
        assert not report.passed
        assert "Total checks: 3" in text
        assert "Counterexamples found: 1" in text
        assert "[1] property_violation / add" in text
