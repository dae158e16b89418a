import csv
import json
from decimal import Decimal

import pytest
from click.testing import CliRunner

from mortgage_calc.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestScheduleCommand:
    def test_default_yearly_view(self, runner):
        result = runner.invoke(cli, ["schedule"])
        assert result.exit_code == 0, result.output
        assert "Monthly payment    : €1,646.85" in result.output
        assert "Year\tBalance" in result.output

    def test_monthly_view_is_truncated(self, runner):
        result = runner.invoke(cli, ["schedule", "--view", "monthly"])
        assert result.exit_code == 0, result.output
        assert "Schedule has 360 rows; showing first 120 rows." in result.output

    def test_short_monthly_schedule(self, runner):
        result = runner.invoke(
            cli, ["schedule", "-p", "12k", "-d", "0", "-r", "6", "-t", "1", "--view", "monthly", "--currency", "usd"]
        )
        assert result.exit_code == 0, result.output
        rows = [line for line in result.output.splitlines() if line.split("\t")[0].isdigit()]
        assert len(rows) == 12
        assert "$12,000.00" in result.output

    def test_json_export(self, runner, tmp_path):
        path = tmp_path / "schedule.json"
        result = runner.invoke(cli, ["schedule", "--extra", "500", "--view", "monthly", "--output", str(path)])
        assert result.exit_code == 0, result.output
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["view"] == "monthly"
        assert len(data["schedule"]) < 360
        assert len(data["term_sweep"]) == 30
        assert data["summary"]["months_saved"] == 360 - len(data["schedule"])

    def test_csv_export(self, runner, tmp_path):
        path = tmp_path / "schedule.csv"
        result = runner.invoke(cli, ["schedule", "--output", str(path)])
        assert result.exit_code == 0, result.output
        with path.open(newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0][0] == "Year"
        assert len(rows) == 31
        assert rows[-1][0] == "30"
        assert Decimal(rows[1][1]) < Decimal("360000")

    def test_unsupported_output(self, runner, tmp_path):
        result = runner.invoke(cli, ["schedule", "--output", str(tmp_path / "out.txt")])
        assert result.exit_code == 2

    def test_invalid_amount(self, runner):
        result = runner.invoke(cli, ["schedule", "--price", "lots"])
        assert result.exit_code == 2
        assert "Invalid amount" in result.output

    def test_down_payment_exceeds_price(self, runner):
        result = runner.invoke(cli, ["schedule", "-p", "100k", "-d", "200k"])
        assert result.exit_code == 2
        assert "must be positive" in result.output

    def test_zero_term(self, runner):
        result = runner.invoke(cli, ["schedule", "-t", "0"])
        assert result.exit_code == 2

    @pytest.mark.parametrize("rate", ["nan", "inf"])
    def test_non_finite_rate(self, runner, rate):
        result = runner.invoke(cli, ["schedule", "-r", rate])
        assert result.exit_code == 2
        assert "Invalid interest rate" in result.output

    def test_zero_rate(self, runner):
        result = runner.invoke(cli, ["schedule", "-p", "360000", "-d", "0", "-r", "0"])
        assert result.exit_code == 0, result.output
        assert "Monthly payment    : €1,000.00" in result.output


class TestSummaryCommand:
    def test_summary_with_extra(self, runner):
        result = runner.invoke(cli, ["summary", "--extra", "500"])
        assert result.exit_code == 0, result.output
        assert "Term reduction" in result.output

    def test_summary_json(self, runner, tmp_path):
        path = tmp_path / "summary.json"
        result = runner.invoke(cli, ["summary", "--output", str(path)])
        assert result.exit_code == 0, result.output
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["summary"]["payments_made"] == 360


class TestPlanCommand:
    def test_plan_lists_thirty_terms(self, runner):
        result = runner.invoke(cli, ["plan", "-p", "400k", "-d", "40k"])
        assert result.exit_code == 0, result.output
        rows = [line for line in result.output.splitlines() if line.strip().split(" ")[0].isdigit()]
        assert len(rows) == 30

    def test_verbose_flag(self, runner):
        result = runner.invoke(cli, ["--verbose", "plan"])
        assert result.exit_code == 0, result.output
