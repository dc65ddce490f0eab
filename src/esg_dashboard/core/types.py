# src/esg_dashboard/core/types.py

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

from esg_dashboard.core.placeholders import (
    GOVERNANCE_METRICS_PLACEHOLDERS,
    GOVERNANCE_PLACEHOLDERS,
    SOCIAL_METRICS_PLACEHOLDERS,
    SOCIAL_PLACEHOLDERS,
)

# One spreadsheet row: header -> None | number | str
RawRow = Mapping[str, Any]


def _plain_number(value: float) -> Any:
    """Whole-valued sums are emitted as ints (200, not 200.0)."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 2**53:
        return int(value)
    return value


@dataclass(frozen=True)
class RowValues:
    """
    Numeric view of a single RawRow after alias resolution and coercion.

    Every field is a finite float; missing cells are 0.0.
    """
    grid_electricity: float = 0.0
    onsite_solar: float = 0.0
    diesel: float = 0.0
    lpg: float = 0.0
    process_gas: float = 0.0
    water_municipal: float = 0.0
    water_borehole: float = 0.0
    waste_generated: float = 0.0
    hazardous_waste: float = 0.0
    recycled_waste: float = 0.0
    production: float = 0.0
    women_pct: float = 0.0
    youth_pct: float = 0.0
    training_hours: float = 0.0
    safety_incidents: float = 0.0
    lost_time_incidents: float = 0.0
    governance_trainings: float = 0.0
    environmental_trainings: float = 0.0
    compliance_findings: float = 0.0


@dataclass
class NormalizedTotals:
    """Running sums of every RowValues field."""
    grid_electricity: float = 0.0
    onsite_solar: float = 0.0
    diesel: float = 0.0
    lpg: float = 0.0
    process_gas: float = 0.0
    water_municipal: float = 0.0
    water_borehole: float = 0.0
    waste_generated: float = 0.0
    hazardous_waste: float = 0.0
    recycled_waste: float = 0.0
    production: float = 0.0
    women_pct: float = 0.0
    youth_pct: float = 0.0
    training_hours: float = 0.0
    safety_incidents: float = 0.0
    lost_time_incidents: float = 0.0
    governance_trainings: float = 0.0
    environmental_trainings: float = 0.0
    compliance_findings: float = 0.0

    def add(self, values: RowValues) -> None:
        for f in fields(RowValues):
            setattr(self, f.name, getattr(self, f.name) + getattr(values, f.name))

    @property
    def total_energy(self) -> float:
        return (
            self.grid_electricity
            + self.onsite_solar
            + self.diesel
            + self.lpg
            + self.process_gas
        )

    @property
    def total_water(self) -> float:
        return self.water_municipal + self.water_borehole


@dataclass
class DerivedSeries:
    """
    Per-row chart series. Entry i of every list belongs to input row i.
    """
    energy_usage: List[int] = field(default_factory=list)
    emissions: List[int] = field(default_factory=list)
    waste: List[int] = field(default_factory=list)
    co2_emissions: List[float] = field(default_factory=list)
    production: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.energy_usage)

    def to_dict(self) -> Dict[str, List[Any]]:
        return {
            "energyUsage": list(self.energy_usage),
            "emissions": list(self.emissions),
            "waste": list(self.waste),
            "co2Emissions": list(self.co2_emissions),
            "production": list(self.production),
        }


@dataclass(frozen=True)
class EnvironmentalSummary:
    total_energy_consumption: int
    renewable_energy_share: float
    carbon_emissions: int
    total_water_use: int
    total_waste: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalEnergyConsumption": self.total_energy_consumption,
            "renewableEnergyShare": self.renewable_energy_share,
            "carbonEmissions": self.carbon_emissions,
            "totalWaterUse": self.total_water_use,
            "totalWaste": self.total_waste,
        }


@dataclass(frozen=True)
class SocialSummary:
    avg_women_representation: float
    avg_youth_representation: float
    total_training_hours: float
    total_safety_incidents: float
    total_lost_time_incidents: float
    placeholders: Mapping[str, Any] = field(default_factory=lambda: SOCIAL_PLACEHOLDERS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.placeholders,
            "avgWomenRepresentation": self.avg_women_representation,
            "avgYouthRepresentation": self.avg_youth_representation,
            "totalTrainingHours": _plain_number(self.total_training_hours),
            "totalSafetyIncidents": _plain_number(self.total_safety_incidents),
            "totalLostTimeIncidents": _plain_number(self.total_lost_time_incidents),
        }


@dataclass(frozen=True)
class GovernanceSummary:
    total_governance_trainings: float
    total_environmental_trainings: float
    total_compliance_findings: float
    placeholders: Mapping[str, Any] = field(default_factory=lambda: GOVERNANCE_PLACEHOLDERS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.placeholders,
            "totalGovernanceTrainings": _plain_number(self.total_governance_trainings),
            "totalEnvironmentalTrainings": _plain_number(self.total_environmental_trainings),
            "totalComplianceFindings": _plain_number(self.total_compliance_findings),
        }


@dataclass(frozen=True)
class EsgSummary:
    environmental: EnvironmentalSummary
    social: SocialSummary
    governance: GovernanceSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "environmental": self.environmental.to_dict(),
            "social": self.social.to_dict(),
            "governance": self.governance.to_dict(),
        }


@dataclass(frozen=True)
class EsgMetrics:
    carbon_tax: int
    tax_allowances: int
    carbon_credits: int
    energy_savings: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "carbonTax": self.carbon_tax,
            "taxAllowances": self.tax_allowances,
            "carbonCredits": self.carbon_credits,
            "energySavings": self.energy_savings,
        }


@dataclass(frozen=True)
class SocialMetrics:
    supplier_diversity: Any
    placeholders: Mapping[str, Any] = field(default_factory=lambda: SOCIAL_METRICS_PLACEHOLDERS)

    def to_dict(self) -> Dict[str, Any]:
        return {"supplierDiversity": self.supplier_diversity, **self.placeholders}


@dataclass(frozen=True)
class GovernanceMetrics:
    corporate_governance: Any
    iso_compliance: Any
    placeholders: Mapping[str, Any] = field(default_factory=lambda: GOVERNANCE_METRICS_PLACEHOLDERS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "corporateGovernance": self.corporate_governance,
            **self.placeholders,
            "isoCompliance": self.iso_compliance,
        }


@dataclass(frozen=True)
class EsgReport:
    """
    Everything the dashboard needs for one uploaded dataset.

    `to_dict()` produces the JSON contract consumed by the pages, the
    insight requester and the persisted runs.
    """
    summary: EsgSummary
    metrics: EsgMetrics
    environmental_metrics: DerivedSeries
    social_metrics: SocialMetrics
    governance_metrics: GovernanceMetrics
    row_count: int = 0
    totals: Optional[NormalizedTotals] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "metrics": self.metrics.to_dict(),
            "environmentalMetrics": self.environmental_metrics.to_dict(),
            "socialMetrics": self.social_metrics.to_dict(),
            "governanceMetrics": self.governance_metrics.to_dict(),
        }
