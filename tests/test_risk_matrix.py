"""
Tests for Risk Matrix Builder — bucketing, defaults and cell tints.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from pulse.core.risk_matrix import (
    build_risk_matrix,
    cell_color,
    impact_band,
    matrix_view,
    probability_band,
)
from pulse.models.entity_models import Risk
from pulse.models.matrix_models import ImpactBand, ProbabilityBand


def test_null_probability_and_impact_land_in_medium_medium():
    matrix = build_risk_matrix([{"probability": None, "impact": None}])
    assert matrix.count("medium", "medium") == 1
    assert matrix.total() == 1
    for probability, impact, count in matrix.cells():
        if (probability, impact) != (ProbabilityBand.MEDIUM, ImpactBand.MEDIUM):
            assert count == 0


def test_absent_fields_use_same_defaults():
    matrix = build_risk_matrix([Risk()])
    assert matrix.count(ProbabilityBand.MEDIUM, ImpactBand.MEDIUM) == 1


def test_zero_is_treated_as_unset():
    assert probability_band(0) == ProbabilityBand.MEDIUM
    assert impact_band(0) == ImpactBand.MEDIUM


@pytest.mark.parametrize(
    "probability,band",
    [(1, ProbabilityBand.LOW), (2, ProbabilityBand.MEDIUM), (3, ProbabilityBand.MEDIUM),
     (4, ProbabilityBand.HIGH), (5, ProbabilityBand.HIGH), (-1, ProbabilityBand.LOW)],
)
def test_probability_bands(probability, band):
    assert probability_band(probability) == band


@pytest.mark.parametrize(
    "impact,band",
    [(1, ImpactBand.LOW), (2, ImpactBand.MEDIUM), (3, ImpactBand.HIGH),
     (4, ImpactBand.CRITICAL), (5, ImpactBand.CRITICAL)],
)
def test_impact_bands(impact, band):
    assert impact_band(impact) == band


def test_severity_does_not_affect_placement():
    matrix = build_risk_matrix(
        [{"severity": "critical", "probability": 1, "impact": 1},
         {"severity": "low", "probability": 4, "impact": 4}]
    )
    assert matrix.count("low", "low") == 1
    assert matrix.count("high", "critical") == 1


def test_empty_and_none_give_all_zero_matrix():
    assert build_risk_matrix([]).total() == 0
    assert build_risk_matrix(None).total() == 0


def test_matrix_serializes_as_nested_mapping():
    data = build_risk_matrix([{"probability": 4, "impact": 3}]).model_dump(mode="json")
    assert list(data) == ["high", "medium", "low"]
    assert data["high"] == {"low": 0, "medium": 0, "high": 1, "critical": 0}
    assert data["low"] == {"low": 0, "medium": 0, "high": 0, "critical": 0}


def test_malformed_risk_is_rejected():
    with pytest.raises(ValidationError):
        build_risk_matrix([None])
    with pytest.raises(ValidationError):
        build_risk_matrix([{"probability": "likely"}])


@given(
    st.lists(
        st.builds(
            dict,
            probability=st.one_of(st.none(), st.integers(min_value=-5, max_value=10)),
            impact=st.one_of(st.none(), st.integers(min_value=-5, max_value=10)),
        ),
        max_size=40,
    )
)
def test_cell_counts_sum_to_number_of_risks(risks):
    matrix = build_risk_matrix(risks)
    assert matrix.total() == len(risks)
    assert len(list(matrix.cells())) == 12


@pytest.mark.parametrize(
    "count,tint",
    [(0, "bg-gray-100"), (1, "bg-success text-white"), (2, "bg-success text-white"),
     (3, "bg-warning"), (4, "bg-warning"), (5, "bg-danger text-white"), (40, "bg-danger text-white")],
)
def test_cell_color(count, tint):
    assert cell_color(count) == tint


def test_matrix_view_classifies_every_cell():
    risks = [{"probability": 4, "impact": 4}] * 5 + [{"probability": 1, "impact": 2}]
    view = matrix_view(build_risk_matrix(risks))
    assert view.total_risks == 6
    assert len(view.cells) == 12
    by_cell = {(c.probability, c.impact): c for c in view.cells}
    assert by_cell[(ProbabilityBand.HIGH, ImpactBand.CRITICAL)].color_class == "bg-danger text-white"
    assert by_cell[(ProbabilityBand.LOW, ImpactBand.MEDIUM)].color_class == "bg-success text-white"
    assert by_cell[(ProbabilityBand.MEDIUM, ImpactBand.LOW)].color_class == "bg-gray-100"
