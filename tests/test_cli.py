from __future__ import annotations

from rich.console import Console

from citysuggest import cli

from conftest import fixture_path


def _base_args(cities: str = "cities_canada-usa.tsv") -> list[str]:
    return [
        "--admin-codes",
        str(fixture_path("admin2Codes.txt")),
        "--cities",
        str(fixture_path(cities)),
    ]


def _console() -> Console:
    return Console(record=True, width=200)


def test_parse_args_suggest_command():
    args = cli._parse_args(["suggest", "York", "--latitude", "40", "--longitude", "-74"])

    assert args.command == "suggest"
    assert args.query == "York"
    assert (args.latitude, args.longitude) == (40.0, -74.0)
    assert args.limit == 10


def test_suggest_prints_ranked_table():
    console = _console()

    exit_code = cli.main([*_base_args(), "suggest", "Montreal"], console=console)

    assert exit_code == 0
    assert "Montréal, QC, Canada" in console.export_text()


def test_suggest_respects_limit():
    console = _console()

    exit_code = cli.main([*_base_args(), "suggest", "York", "--limit", "1"], console=console)

    output = console.export_text()
    assert exit_code == 0
    assert "York, PA, United States" in output
    assert "New York City" not in output


def test_suggest_rejects_invalid_location():
    exit_code = cli.main(
        [*_base_args(), "suggest", "York", "--latitude", "200", "--longitude", "0"],
        console=_console(),
    )

    assert exit_code == 2


def test_stats_prints_counters():
    console = _console()

    exit_code = cli.main([*_base_args("cities_duplicates.tsv"), "stats"], console=console)

    output = console.export_text()
    assert exit_code == 0
    assert "Dropped (ambiguous)" in output
    assert "Loaded" in output


def test_load_failure_exits_with_error(tmp_path):
    exit_code = cli.main(
        [
            "--admin-codes",
            str(fixture_path("admin2Codes.txt")),
            "--cities",
            str(tmp_path / "missing.tsv"),
            "stats",
        ],
        console=_console(),
    )

    assert exit_code == 1


def test_serve_forwards_log_level_to_server(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "run", lambda log_level=None: calls.append(log_level))

    exit_code = cli.main(["--log-level", "debug", "serve"], console=_console())

    assert exit_code == 0
    assert calls == ["debug"]
