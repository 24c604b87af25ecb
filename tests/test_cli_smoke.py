from __future__ import annotations

from typer.testing import CliRunner

import statsheet_archiver.cli.app as cli
from statsheet_archiver.ingestion.day_pipeline import DayResult
from statsheet_archiver.ingestion.errors import ProviderRequestError
from statsheet_archiver.ingestion.season import SeasonResult


def test_cli_help_smoke() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["--help"])
    assert result.exit_code == 0
    assert "SEASON" in result.output


def test_cli_missing_season_exits_non_zero() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 1
    assert "Missing season!" in result.output


def test_cli_reports_summary(monkeypatch) -> None:
    seen: list[str | None] = []

    class FakeOrchestrator:
        def __init__(self, config) -> None:
            pass

        async def run(self, season_arg: str | None) -> SeasonResult:
            seen.append(season_arg)
            return SeasonResult(
                season=11,
                days=[DayResult(day=0, games_written=2, player_batches=1, player_statsheets_written=9)],
            )

    monkeypatch.setattr(cli, "SeasonOrchestrator", FakeOrchestrator)

    result = CliRunner().invoke(cli.app, ["12"])

    assert result.exit_code == 0
    assert seen == ["12"]
    assert "Archived season 12:" in result.output
    assert "player_statsheets_written=9" in result.output


def test_cli_pipeline_error_exits_non_zero(monkeypatch) -> None:
    class FailingOrchestrator:
        def __init__(self, config) -> None:
            pass

        async def run(self, season_arg: str | None) -> SeasonResult:
            raise ProviderRequestError("HTTP 500 for GET https://example.test/database/games")

    monkeypatch.setattr(cli, "SeasonOrchestrator", FailingOrchestrator)

    result = CliRunner().invoke(cli.app, ["3"])

    assert result.exit_code == 1
    assert "HTTP 500" in result.output
