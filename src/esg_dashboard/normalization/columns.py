# src/esg_dashboard/normalization/columns.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from esg_dashboard.core.types import RawRow, RowValues
from esg_dashboard.utils.numeric_parser import coerce_number


@dataclass(frozen=True)
class ColumnAlias:
    """
    Header spellings for one logical field.

    Headers are matched exactly (case and spacing included). The fallback
    is consulted only when the primary cell is absent or None.
    """
    field: str
    primary: str
    fallback: Optional[str] = None


# ---------------------------------------------------------------------
# Header table of the ESG KPI template (abbreviated -> full spelling)
# ---------------------------------------------------------------------

COLUMN_ALIASES: Tuple[ColumnAlias, ...] = (
    ColumnAlias("grid_electricity", "Grid Electr", "Grid Electricity"),
    ColumnAlias("onsite_solar", "Onsite Sol", "Onsite Solar"),
    ColumnAlias("diesel", "Diesel (L)"),
    ColumnAlias("lpg", "LPG (kg)"),
    ColumnAlias("process_gas", "Process G", "Process Gas"),
    ColumnAlias("water_municipal", "Water Mu"),
    ColumnAlias("water_borehole", "Water Bor"),
    ColumnAlias("waste_generated", "Waste Ge", "Waste Gen"),
    ColumnAlias("hazardous_waste", "Hazardou:"),
    ColumnAlias("recycled_waste", "Recycled W"),
    ColumnAlias("production", "Production"),
    ColumnAlias("women_pct", "Women (%)"),
    ColumnAlias("youth_pct", "Youth (%)"),
    ColumnAlias("training_hours", "Employee Training H"),
    ColumnAlias("safety_incidents", "Safety Inc"),
    ColumnAlias("lost_time_incidents", "Lost Time"),
    ColumnAlias("governance_trainings", "Governan"),
    ColumnAlias("environmental_trainings", "Environm"),
    ColumnAlias("compliance_findings", "Compliance Findings (No.)"),
)


def resolve_cell(row: RawRow, alias: ColumnAlias) -> Any:
    """Raw cell value for `alias`, trying the primary header first."""
    value = row.get(alias.primary)
    if value is None and alias.fallback is not None:
        value = row.get(alias.fallback)
    return value


def extract_row_values(row: RawRow) -> RowValues:
    """
    Resolve and coerce every known field of a row.

    Unknown headers are ignored; missing or unparseable cells become 0.0.
    """
    return RowValues(**{
        alias.field: coerce_number(resolve_cell(row, alias))
        for alias in COLUMN_ALIASES
    })
