# src/esg_dashboard/pipeline/aggregator.py
from __future__ import annotations

import logging
from typing import Iterable, List

from esg_dashboard.core.placeholders import GOVERNANCE_PLACEHOLDERS, SOCIAL_PLACEHOLDERS
from esg_dashboard.core.types import (
    DerivedSeries,
    EnvironmentalSummary,
    EsgMetrics,
    EsgReport,
    EsgSummary,
    GovernanceMetrics,
    GovernanceSummary,
    NormalizedTotals,
    RawRow,
    RowValues,
    SocialMetrics,
    SocialSummary,
)
from esg_dashboard.normalization.columns import extract_row_values
from esg_dashboard.utils.numeric_parser import js_round, round_to

logger = logging.getLogger(__name__)


# ----------------------------------------------------------
# Fixed factors
#
# Illustrative, not regulatory. Changing any of these changes
# every stored carbon-tax figure, so they stay as they are.
# ----------------------------------------------------------

# Litres of diesel / kg of LPG -> energy units in the usage series
DIESEL_ENERGY_FACTOR = 0.01
LPG_ENERGY_FACTOR = 0.01

# tCO2e per unit of input
DIESEL_CO2_FACTOR = 0.00268
LPG_CO2_FACTOR = 0.0015
GRID_CO2_FACTOR = 0.0009
PROCESS_GAS_CO2_FACTOR = 0.0018

CARBON_TAX_PER_TONNE = 150
TAX_ALLOWANCE_RATE = 0.05
CARBON_CREDIT_RATE = 0.1
ENERGY_SAVINGS_RATE = 0.08


def row_energy(values: RowValues) -> float:
    return (
        values.grid_electricity
        + values.onsite_solar
        + values.process_gas
        + values.diesel * DIESEL_ENERGY_FACTOR
        + values.lpg * LPG_ENERGY_FACTOR
    )


def row_co2(values: RowValues) -> float:
    return (
        values.diesel * DIESEL_CO2_FACTOR
        + values.lpg * LPG_CO2_FACTOR
        + values.grid_electricity * GRID_CO2_FACTOR
        + values.process_gas * PROCESS_GAS_CO2_FACTOR
    )


def _append_series(series: DerivedSeries, values: RowValues) -> None:
    series.energy_usage.append(js_round(row_energy(values)))
    series.emissions.append(js_round(values.waste_generated + values.hazardous_waste))
    series.waste.append(js_round(values.waste_generated))
    series.co2_emissions.append(round_to(row_co2(values), 1))
    series.production.append(js_round(values.production))


# ----------------------------------------------------------
# Main aggregation
# ----------------------------------------------------------

def build_esg_from_rows(rows: Iterable[RawRow]) -> EsgReport:
    """
    Turn spreadsheet rows into the dashboard's ESG report.

    Single pass over `rows`:
        - every known column is resolved (primary header, then fallback)
          and coerced to a number; anything missing counts as 0
        - raw values are summed into NormalizedTotals
        - one entry per row is appended to each chart series

    Totals do not depend on row order; series entry i always belongs to
    row i. Averages divide by the row count, or by 1 for an empty input.

    Pure function: no I/O, never raises on row content.
    """
    totals = NormalizedTotals()
    series = DerivedSeries()

    row_list: List[RawRow] = list(rows)
    for row in row_list:
        values = extract_row_values(row)
        totals.add(values)
        _append_series(series, values)

    n = len(row_list) or 1

    total_energy = totals.total_energy
    total_water = totals.total_water

    # Sum of the already rounded per-row values, not of the raw totals
    total_co2_tonnes = sum(series.co2_emissions)

    renewable_share = (
        (totals.onsite_solar / total_energy) * 100 if total_energy > 0 else 0.0
    )

    summary = EsgSummary(
        environmental=EnvironmentalSummary(
            total_energy_consumption=js_round(total_energy),
            renewable_energy_share=round_to(renewable_share, 1),
            carbon_emissions=js_round(total_co2_tonnes),
            total_water_use=js_round(total_water),
            total_waste=js_round(totals.waste_generated),
        ),
        social=SocialSummary(
            avg_women_representation=round_to(totals.women_pct / n, 1),
            avg_youth_representation=round_to(totals.youth_pct / n, 1),
            total_training_hours=totals.training_hours,
            total_safety_incidents=totals.safety_incidents,
            total_lost_time_incidents=totals.lost_time_incidents,
        ),
        governance=GovernanceSummary(
            total_governance_trainings=totals.governance_trainings,
            total_environmental_trainings=totals.environmental_trainings,
            total_compliance_findings=totals.compliance_findings,
        ),
    )

    metrics = EsgMetrics(
        carbon_tax=js_round(total_co2_tonnes * CARBON_TAX_PER_TONNE),
        tax_allowances=js_round(total_energy * TAX_ALLOWANCE_RATE),
        carbon_credits=js_round(total_co2_tonnes * CARBON_CREDIT_RATE),
        energy_savings=js_round(total_energy * ENERGY_SAVINGS_RATE),
    )

    logger.debug(
        "aggregator: %d rows, energy=%.1f, co2=%.1f t",
        len(row_list),
        total_energy,
        total_co2_tonnes,
    )

    return EsgReport(
        summary=summary,
        metrics=metrics,
        environmental_metrics=series,
        social_metrics=SocialMetrics(
            supplier_diversity=SOCIAL_PLACEHOLDERS["supplierDiversity"],
        ),
        governance_metrics=GovernanceMetrics(
            corporate_governance=GOVERNANCE_PLACEHOLDERS["corporateGovernance"],
            iso_compliance=GOVERNANCE_PLACEHOLDERS["iso9001Compliance"],
        ),
        row_count=len(row_list),
        totals=totals,
    )
