"""Unit tests for field weight schemes."""

from pydantic import ValidationError
import pytest

from bookmark_search.search.weights import REFERENCE_WEIGHTS, FieldWeight, FieldWeightScheme


pytestmark = pytest.mark.unit


def test_reference_weights():
    assert REFERENCE_WEIGHTS.field_names == ("title", "url")
    assert REFERENCE_WEIGHTS.total_weight == pytest.approx(1.0)


def test_combine_is_normalized_weighted_mean():
    scheme = FieldWeightScheme.from_pairs((("title", 3.0), ("url", 1.0)))
    assert scheme.combine([0.0, 1.0]) == pytest.approx(0.25)


def test_combine_requires_one_score_per_field():
    with pytest.raises(ValueError, match="Expected 2 field scores"):
        REFERENCE_WEIGHTS.combine([0.5])


def test_rejects_negative_weight():
    with pytest.raises(ValidationError):
        FieldWeight(field_name="title", weight=-0.1)


def test_rejects_all_zero_weights():
    with pytest.raises(ValidationError, match="must not all be zero"):
        FieldWeightScheme.from_pairs((("title", 0.0), ("url", 0.0)))


def test_rejects_empty_scheme():
    with pytest.raises(ValidationError, match="at least one field"):
        FieldWeightScheme(fields=())


def test_scheme_is_immutable():
    with pytest.raises(ValidationError):
        REFERENCE_WEIGHTS.fields = ()
