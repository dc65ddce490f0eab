# tests/test_aggregator.py
import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from esg_dashboard.core.placeholders import SOCIAL_PLACEHOLDERS
from esg_dashboard.pipeline.aggregator import build_esg_from_rows

SERIES_KEYS = ("energyUsage", "emissions", "waste", "co2Emissions", "production")

MONTHLY_ROWS = [
    {
        "Grid Electr": 1000,
        "Onsite Sol": 200,
        "Diesel (L)": 50,
        "LPG (kg)": 10,
        "Process G": 0,
        "Water Mu": 300,
        "Water Bor": 120,
        "Waste Ge": "10,4",
        "Hazardou:": 2.3,
        "Recycled W": 4,
        "Production": 500,
        "Women (%)": 40,
        "Youth (%)": "30,5",
        "Employee Training H": 120,
        "Safety Inc": 2,
        "Lost Time": 1,
        "Governan": 3,
        "Environm": 1,
        "Compliance Findings (No.)": 0,
    },
    {
        "Grid Electricity": 800,
        "Onsite Solar": 250,
        "Diesel (L)": None,
        "LPG (kg)": "",
        "Process Gas": 100,
        "Water Mu": 280,
        "Water Bor": None,
        "Waste Gen": 9,
        "Hazardou:": None,
        "Recycled W": 3,
        "Production": 480.5,
        "Women (%)": 45,
        "Youth (%)": 20,
        "Employee Training H": 80,
        "Safety Inc": 0,
        "Lost Time": 0,
        "Governan": 2,
        "Environm": 4,
        "Compliance Findings (No.)": 1,
    },
]


def test_empty_input_gives_zero_report():
    data = build_esg_from_rows([]).to_dict()

    env = data["summary"]["environmental"]
    assert env == {
        "totalEnergyConsumption": 0,
        "renewableEnergyShare": 0,
        "carbonEmissions": 0,
        "totalWaterUse": 0,
        "totalWaste": 0,
    }
    assert data["summary"]["social"]["avgWomenRepresentation"] == 0
    assert data["summary"]["social"]["avgYouthRepresentation"] == 0
    assert data["metrics"] == {
        "carbonTax": 0,
        "taxAllowances": 0,
        "carbonCredits": 0,
        "energySavings": 0,
    }
    for key in SERIES_KEYS:
        assert data["environmentalMetrics"][key] == []


def test_every_series_has_one_entry_per_row():
    rows = MONTHLY_ROWS + [{}, {"Unrelated": "x"}]
    data = build_esg_from_rows(rows).to_dict()

    for key in SERIES_KEYS:
        assert len(data["environmentalMetrics"][key]) == len(rows)

    # rows without any known column contribute zeros, not gaps
    assert data["environmentalMetrics"]["energyUsage"][2:] == [0, 0]


def test_alias_fallback_matches_primary_header():
    primary = build_esg_from_rows([{"Grid Electr": 100}]).to_dict()
    fallback = build_esg_from_rows([{"Grid Electricity": 100}]).to_dict()

    assert primary == fallback
    assert fallback["summary"]["environmental"]["totalEnergyConsumption"] == 100


def test_renewable_share_from_totals():
    rows = [
        {"Grid Electr": 60, "Onsite Sol": 30, "Diesel (L)": 10},
        {"Grid Electr": 40, "Onsite Sol": 20, "LPG (kg)": 20, "Process G": 20},
    ]
    env = build_esg_from_rows(rows).to_dict()["summary"]["environmental"]

    assert env["totalEnergyConsumption"] == 200
    assert env["renewableEnergyShare"] == 25.0


def test_renewable_share_is_not_clamped():
    rows = [{"Onsite Sol": 100, "Grid Electr": -50}]
    env = build_esg_from_rows(rows).to_dict()["summary"]["environmental"]

    assert env["renewableEnergyShare"] == 200.0


def test_carbon_tax_uses_sum_of_rounded_row_co2():
    rows = [
        {"Grid Electr": 1_000_000},   # 900.0 t
        {"LPG (kg)": "66666,67"},     # 100.000005 t -> 100.0
    ]
    data = build_esg_from_rows(rows).to_dict()

    assert data["environmentalMetrics"]["co2Emissions"] == [900.0, 100.0]
    assert data["summary"]["environmental"]["carbonEmissions"] == 1000
    assert data["metrics"]["carbonTax"] == 150000
    assert data["metrics"]["carbonCredits"] == 100


def test_rounded_row_co2_differs_from_rounding_the_total():
    # 0.04 t per row rounds to 0.0, so ten rows still report zero tonnes
    rows = [{"Process G": 0.04 / 0.0018}] * 10
    data = build_esg_from_rows(rows).to_dict()

    assert data["environmentalMetrics"]["co2Emissions"] == [0.0] * 10
    assert data["metrics"]["carbonTax"] == 0


def test_totals_ignore_row_order_but_series_follow_it():
    rows = [
        {"Grid Electr": 100, "Onsite Sol": 10, "Waste Ge": 5, "Production": 1, "Women (%)": 30},
        {"Grid Electr": 300, "Diesel (L)": 200, "Waste Ge": 7, "Production": 2, "Women (%)": 50},
        {"Process G": 50, "LPG (kg)": 100, "Hazardou:": 4, "Production": 3, "Women (%)": 40},
    ]
    forward = build_esg_from_rows(rows).to_dict()
    backward = build_esg_from_rows(list(reversed(rows))).to_dict()

    assert forward["summary"] == backward["summary"]
    assert forward["metrics"] == backward["metrics"]

    for key in SERIES_KEYS:
        assert backward["environmentalMetrics"][key] == list(
            reversed(forward["environmentalMetrics"][key])
        )
    assert forward["environmentalMetrics"]["production"] == [1, 2, 3]


def test_single_row_energy_and_co2_entries():
    rows = [{
        "Grid Electr": 1000,
        "Onsite Sol": 200,
        "Diesel (L)": 50,
        "LPG (kg)": 10,
        "Process G": 0,
        "Production": 500,
    }]
    env = build_esg_from_rows(rows).to_dict()["environmentalMetrics"]

    assert env["energyUsage"][0] == 1201
    assert env["co2Emissions"][0] == 1.0
    assert env["production"][0] == 500


def test_monthly_report_values():
    report = build_esg_from_rows(MONTHLY_ROWS)
    data = report.to_dict()

    env = data["summary"]["environmental"]
    # 1000+800 grid, 450 solar, 50 diesel, 10 lpg, 100 process gas
    assert env["totalEnergyConsumption"] == 2410
    assert env["renewableEnergyShare"] == 18.7
    assert env["totalWaterUse"] == 700
    assert env["totalWaste"] == 19

    series = data["environmentalMetrics"]
    assert series["energyUsage"] == [1201, 1150]
    assert series["emissions"] == [13, 9]
    assert series["waste"] == [10, 9]
    assert series["co2Emissions"] == [1.0, 0.9]
    assert series["production"] == [500, 481]

    assert env["carbonEmissions"] == 2
    assert data["metrics"] == {
        "carbonTax": 285,
        "taxAllowances": 121,
        "carbonCredits": 0,
        "energySavings": 193,
    }

    social = data["summary"]["social"]
    assert social["avgWomenRepresentation"] == 42.5
    # (30.5 + 20) / 2 = 25.25 -> 25.3
    assert social["avgYouthRepresentation"] == 25.3
    assert social["totalTrainingHours"] == 200
    assert social["totalSafetyIncidents"] == 2
    assert social["totalLostTimeIncidents"] == 1

    gov = data["summary"]["governance"]
    assert gov["totalGovernanceTrainings"] == 5
    assert gov["totalEnvironmentalTrainings"] == 5
    assert gov["totalComplianceFindings"] == 1

    assert report.row_count == 2
    assert report.totals.recycled_waste == 7
    assert report.totals.hazardous_waste == 2.3


def test_placeholders_are_merged_into_output():
    data = build_esg_from_rows(MONTHLY_ROWS).to_dict()

    social = data["summary"]["social"]
    assert social["supplierDiversity"] == 3
    assert social["customerSatisfaction"] == 85
    assert social["humanCapital"] == 92

    gov = data["summary"]["governance"]
    assert gov["corporateGovernance"] == "Compliant"
    assert gov["iso9001Compliance"] == "Yes"
    assert gov["businessEthics"] == "High"

    assert data["socialMetrics"] == {
        "supplierDiversity": 3,
        "employeeEngagement": 70,
        "communityPrograms": 40,
    }
    assert data["governanceMetrics"] == {
        "corporateGovernance": "Compliant",
        "dataPrivacy": "Compliant",
        "isoCompliance": "Yes",
    }


def test_placeholder_constants_are_read_only():
    with pytest.raises(TypeError):
        SOCIAL_PLACEHOLDERS["supplierDiversity"] = 10  # type: ignore[index]


def test_malformed_cells_degrade_to_zero():
    rows = [{"Grid Electr": "n/a", "Diesel (L)": object(), "Waste Ge": "12,4", "Production": True}]
    data = build_esg_from_rows(rows).to_dict()

    assert data["summary"]["environmental"]["totalEnergyConsumption"] == 0
    assert data["environmentalMetrics"]["waste"] == [12]
    assert data["environmentalMetrics"]["production"] == [0]


def test_to_dict_returns_independent_lists():
    report = build_esg_from_rows(MONTHLY_ROWS)
    first = report.to_dict()
    first["environmentalMetrics"]["energyUsage"].append(999)

    assert report.to_dict()["environmentalMetrics"]["energyUsage"] == [1201, 1150]


def test_concurrent_calls_do_not_interfere():
    expected = build_esg_from_rows(MONTHLY_ROWS).to_dict()

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: build_esg_from_rows(MONTHLY_ROWS).to_dict(), range(32)))

    assert all(r == expected for r in results)


def test_huge_cells_do_not_raise():
    data = build_esg_from_rows([{"Grid Electr": 1e31}]).to_dict()
    assert data["environmentalMetrics"]["co2Emissions"] == [1e31 * 0.0009]
    assert data["summary"]["environmental"]["totalEnergyConsumption"] == int(1e31)

    social = build_esg_from_rows([{"Women (%)": "1e30"}]).to_dict()["summary"]["social"]
    assert social["avgWomenRepresentation"] == 1e30


def test_whole_counts_serialize_as_ints():
    data = build_esg_from_rows(MONTHLY_ROWS).to_dict()
    social = data["summary"]["social"]
    gov = data["summary"]["governance"]

    assert isinstance(social["totalTrainingHours"], int)
    assert isinstance(gov["totalComplianceFindings"], int)
    assert '"totalTrainingHours": 200,' in json.dumps(social)

    fractional = build_esg_from_rows([{"Employee Training H": "12,5"}]).to_dict()
    assert fractional["summary"]["social"]["totalTrainingHours"] == 12.5
