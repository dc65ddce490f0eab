# data/samples/make_samples.py
from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

# ---------------------------------------------------------------------
# Global deterministic seed
# ---------------------------------------------------------------------
random.seed(42)

# ---------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------
THIS_FILE = Path(__file__).resolve()
PROJECT_ROOT = THIS_FILE.parents[2]
RAW_DIR = PROJECT_ROOT / "data" / "samples"
RAW_DIR.mkdir(parents=True, exist_ok=True)

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Abbreviated headers as exported by the KPI template
SHORT_HEADERS = {
    "grid": "Grid Electr",
    "solar": "Onsite Sol",
    "process": "Process G",
    "waste": "Waste Ge",
}

# Full spellings used by older templates
FULL_HEADERS = {
    "grid": "Grid Electricity",
    "solar": "Onsite Solar",
    "process": "Process Gas",
    "waste": "Waste Gen",
}


# ---------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------
def _month_row(month: str, headers: Dict[str, str]) -> Dict[str, Any]:
    return {
        "Month": month,
        headers["grid"]: random.randint(80_000, 120_000),
        headers["solar"]: random.randint(8_000, 25_000),
        "Diesel (L)": random.randint(500, 3_000),
        "LPG (kg)": random.randint(100, 900),
        headers["process"]: random.randint(5_000, 15_000),
        "Water Mu": random.randint(1_000, 4_000),
        "Water Bor": random.randint(200, 1_500),
        headers["waste"]: round(random.uniform(20, 60), 1),
        "Hazardou:": round(random.uniform(0.5, 5), 1),
        "Recycled W": round(random.uniform(5, 30), 1),
        "Production": random.randint(110_000, 126_000),
        "Women (%)": random.randint(30, 50),
        "Youth (%)": random.randint(15, 35),
        "Employee Training H": random.randint(200, 800),
        "Safety Inc": random.randint(0, 4),
        "Lost Time": random.randint(0, 2),
        "Governan": random.randint(0, 3),
        "Environm": random.randint(0, 3),
        "Compliance Findings (No.)": random.randint(0, 2),
    }


def _with_decimal_commas(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Some sites type decimals by hand: 12.5 -> "12,5"."""
    out = []
    for row in rows:
        row = dict(row)
        for key in ("Hazardou:", "Recycled W"):
            row[key] = str(row[key]).replace(".", ",")
        out.append(row)
    return out


# ---------------------------------------------------------------------
# Sample generators
# ---------------------------------------------------------------------
def make_kpi_monthly(path: Path) -> None:
    rows = [_month_row(m, SHORT_HEADERS) for m in MONTHS]
    pd.DataFrame(rows).to_excel(path, index=False)


def make_kpi_full_headers(path: Path) -> None:
    rows = _with_decimal_commas([_month_row(m, FULL_HEADERS) for m in MONTHS])
    pd.DataFrame(rows).to_csv(path, index=False)


def make_kpi_gaps(path: Path) -> None:
    rows = [_month_row(m, SHORT_HEADERS) for m in MONTHS[:6]]
    rows[1]["Grid Electr"] = None
    rows[2]["Diesel (L)"] = "n/a"
    rows[4]["Onsite Sol"] = None
    pd.DataFrame(rows).to_excel(path, index=False)


def make_dataset_json(path: Path) -> None:
    dataset = {
        "summary": {
            "environmental": {
                "totalEnergyConsumption": 1_450_000,
                "renewableEnergyShare": 14.2,
                "carbonEmissions": 1_310,
            },
            "social": {"supplierDiversity": 3},
            "governance": {"corporateGovernance": "Compliant"},
        },
        "metrics": {
            "carbonTax": 196_500,
            "taxAllowances": 72_500,
            "carbonCredits": 131,
            "energySavings": 116_000,
        },
    }
    path.write_text(json.dumps(dataset, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------
# Main Entrypoint
# ---------------------------------------------------------------------
def main() -> None:
    print(f"Writing samples into: {RAW_DIR}")

    generators = [
        ("esg_kpi_monthly.xlsx", make_kpi_monthly),
        ("esg_kpi_full_headers.csv", make_kpi_full_headers),
        ("esg_kpi_gaps.xlsx", make_kpi_gaps),
        ("esg_dataset.json", make_dataset_json),
    ]

    for filename, fn in generators:
        print(f"Generating {filename} ...")
        fn(RAW_DIR / filename)

    print("Done.")


if __name__ == "__main__":
    main()
