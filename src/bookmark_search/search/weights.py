"""Field weighting for aggregate record scores."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldWeight(BaseModel):
    """Relative contribution of one field to a record's score."""

    model_config = ConfigDict(frozen=True)

    field_name: str = Field(min_length=1)
    weight: float = Field(ge=0.0)


class FieldWeightScheme(BaseModel):
    """Ordered field weights.

    Weights are relative: they are normalized by their total when scores are
    combined, so ``title=3, url=2`` ranks exactly like ``title=0.6, url=0.4``.
    """

    model_config = ConfigDict(frozen=True)

    fields: tuple[FieldWeight, ...]

    @model_validator(mode="after")
    def _check_total(self) -> FieldWeightScheme:
        if not self.fields:
            raise ValueError("A weight scheme needs at least one field")
        if self.total_weight <= 0:
            raise ValueError("Field weights must not all be zero")
        return self

    @classmethod
    def from_pairs(cls, pairs: Sequence[tuple[str, float]]) -> FieldWeightScheme:
        return cls(fields=tuple(FieldWeight(field_name=name, weight=weight) for name, weight in pairs))

    @property
    def total_weight(self) -> float:
        return sum(field.weight for field in self.fields)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field.field_name for field in self.fields)

    def combine(self, scores: Sequence[float]) -> float:
        """Weighted mean of per-field scores, in scheme order."""
        if len(scores) != len(self.fields):
            raise ValueError(f"Expected {len(self.fields)} field scores, got {len(scores)}")
        weighted = sum(field.weight * score for field, score in zip(self.fields, scores, strict=True))
        return weighted / self.total_weight


REFERENCE_WEIGHTS = FieldWeightScheme.from_pairs((("title", 0.6), ("url", 0.4)))
