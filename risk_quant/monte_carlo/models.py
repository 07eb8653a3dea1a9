"""
PURPOSE: Input models for the Monte Carlo engine.

RESPONSIBILITIES:
- DistributionModel: the closed set of sampling families
- RiskInput: one risk/opportunity line item as supplied by the risk register
- SimulationConfig: run-level settings (iterations, target percentile, seed)
- Single responsibility: parsing and validation only, no sampling
"""

from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import get_default_simulation_settings

_DEFAULTS = get_default_simulation_settings()


class DistributionModel(str, Enum):
    TRIANGULAR = "triangular"
    PERT = "pert"
    NORMAL = "normal"
    UNIFORM = "uniform"
    LOGNORMAL = "lognormal"
    WEIBULL = "weibull"

    @classmethod
    def _missing_(cls, value):
        # Register exports are not consistent about case ("Normal", "PERT").
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class RiskInput(BaseModel):
    """A risk (positive impact) or opportunity (negative impact) line item.

    Every estimate field is optional because register rows are often
    incomplete; use ``is_valid`` to decide whether the row can be simulated.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str
    risk_number: Optional[str] = Field(default=None, alias="riskNumber")
    title: Optional[str] = None
    optimistic_p10: Optional[float] = Field(default=None, alias="optimisticP10")
    likely_p50: Optional[float] = Field(default=None, alias="likelyP50")
    pessimistic_p90: Optional[float] = Field(default=None, alias="pessimisticP90")
    probability: Optional[float] = Field(default=None, ge=0, le=100)
    distribution_model: Optional[DistributionModel] = Field(default=None, alias="distributionModel")

    @field_validator("id", "risk_number", mode="before")
    @classmethod
    def _stringify_identifier(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def is_valid(self) -> bool:
        """True when all three percentiles, the probability and the model are present."""
        return (
            self.optimistic_p10 is not None
            and self.likely_p50 is not None
            and self.pessimistic_p90 is not None
            and self.probability is not None
            and self.distribution_model is not None
        )

    @property
    def label(self) -> str:
        return self.risk_number or self.title or self.id

    @classmethod
    def from_record(cls, record: Union["RiskInput", Mapping[str, Any]]) -> "RiskInput":
        """Build a RiskInput from a register row (camelCase or snake_case keys)."""
        if isinstance(record, cls):
            return record
        return cls.model_validate(record)


class SimulationConfig(BaseModel):
    """Run-level settings. Defaults come from config.py."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    iterations: int = Field(default=_DEFAULTS["iterations"], ge=1)
    target_percentile: float = Field(default=_DEFAULTS["target_percentile"], ge=0, le=100, alias="targetPercentile")
    seed: Optional[int] = _DEFAULTS["seed"]
    progress_interval: int = Field(default=_DEFAULTS["progress_interval"], ge=1, alias="progressInterval")
