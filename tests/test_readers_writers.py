import csv
import json
import logging

import pandas as pd
import pytest

from comp_rollup.config.models import BudgetSettings
from comp_rollup.data.readers import read_roster, read_roster_records
from comp_rollup.data.writers import CSV_COLUMNS, write_report_json, write_roster_csv
from comp_rollup.exceptions import DataReadError
from comp_rollup.reporting.report import compute_report


def test_read_csv_keeps_text_ids_and_blanks(tmp_path):
    f = tmp_path / "roster.csv"
    f.write_text(
        "Employee ID,name,currency,currentLevel,currentBaseSalary,meritIncrease,hasPromotion\n"
        "007,Ada,GBP,P3,100000,4,no\n"
        "008,Grace,,,80000,,yes\n"
    )
    records = read_roster_records(f)
    assert [r["id"] for r in records] == ["007", "008"]
    assert records[1]["meritIncrease"] is None

    roster = read_roster(f)
    ada, grace = roster.employees
    assert ada.currency == "GBP"
    assert ada.merit_percent == 4.0
    assert grace.currency == "USD"
    assert grace.current_level is None
    assert grace.has_promotion is True


def test_read_json_list_and_project_layout(tmp_path):
    rows = [{"id": "1", "name": "Ada", "currentBaseSalary": 100000}]
    as_list = tmp_path / "list.json"
    as_list.write_text(json.dumps(rows))
    as_project = tmp_path / "project.json"
    as_project.write_text(json.dumps({"projectName": "x", "employees": rows}))
    assert read_roster_records(as_list) == rows
    assert read_roster_records(as_project) == rows


@pytest.mark.parametrize("name, content", [("roster.txt", "x"), ("bad.json", "{not json"), ("scalar.json", "3")])
def test_unreadable_rosters_raise(tmp_path, name, content):
    f = tmp_path / name
    f.write_text(content)
    with pytest.raises(DataReadError):
        read_roster_records(f)


def test_missing_roster_raises(tmp_path):
    with pytest.raises(DataReadError):
        read_roster(tmp_path / "nope.csv")


def test_write_roster_csv(tmp_path, sample_roster):
    report = compute_report(sample_roster, BudgetSettings())
    out = write_roster_csv(report.employees, tmp_path / "out" / "roster.csv")

    raw = out.read_text().splitlines()
    assert raw[0] == ",".join(f'"{col}"' for col in CSV_COLUMNS)

    df = pd.read_csv(out)
    assert df["Name"].tolist() == ["Ada", "Grace", "Linus"]
    assert df["Has Promotion"].tolist() == ["No", "Yes", "No"]
    assert df["Flagged"].tolist() == ["No", "No", "No"]
    assert df["Proposed Base Salary"].tolist() == [104000.0, 88000.0, 122500.0]

    with open(out, newline="") as fh:
        rows = list(csv.reader(fh))
    assert len(rows) == 4


def test_write_report_json(tmp_path, sample_roster):
    report = compute_report(sample_roster, BudgetSettings())
    out = write_report_json(report, tmp_path / "report.json")
    payload = json.loads(out.read_text())
    assert payload["employee_count"] == 3
    assert payload["budget"]["base"]["used"] == pytest.approx(16700.0)
    assert [lvl["level"] for lvl in payload["level_breakdown"]] == ["P3", "M2"]


def test_exported_csv_reads_back(tmp_path, sample_roster, default_settings):
    report = compute_report(sample_roster, default_settings)
    out = write_roster_csv(report.employees, tmp_path / "roster.csv")

    roster = read_roster(out)
    assert [emp.name for emp in roster] == ["Ada", "Grace", "Linus"]
    assert [emp.currency for emp in roster] == ["USD", "GBP", "EUR"]
    assert [emp.current_base_salary for emp in roster] == [100000.0, 80000.0, 120000.0]
    assert [emp.increase_amount for emp in roster] == [4000.0, 8000.0, 2500.0]
    assert [emp.has_promotion for emp in roster] == [False, True, False]
    assert roster.employees[1].next_level == "P4"

    again = compute_report(roster, default_settings)
    assert again.budget.base.used == pytest.approx(report.budget.base.used)


def test_csv_without_salary_column_warns(tmp_path, caplog):
    f = tmp_path / "names.csv"
    f.write_text("name\nAda\n")
    with caplog.at_level(logging.WARNING):
        roster = read_roster(f)
    assert roster.employees[0].current_base_salary == 0.0
    assert "No current base salary column" in caplog.text
