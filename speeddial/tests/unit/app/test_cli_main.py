from __future__ import annotations

import json

import pytest

from speeddial.adapters.open_meteo import OpenMeteoWeather
from speeddial.app.main import EXIT_FAILED, EXIT_OK, EXIT_UNSAVED, main
from speeddial.domain.entities import WeatherObservation


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    for var in ("SPEEDDIAL_QUOTA_BYTES", "SPEEDDIAL_LOG_LEVEL", "SPEEDDIAL_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    return str(tmp_path / "profile")


def test_add_tile_then_show(data_dir, capsys) -> None:
    assert main(["--data-dir", data_dir, "add-tile", "example.com", "--title", "Example"]) == EXIT_OK
    tile_id = capsys.readouterr().out.strip()

    assert main(["--data-dir", data_dir, "show"]) == EXIT_OK
    out = capsys.readouterr().out

    assert tile_id.startswith("t")
    assert "* [home-group] Home" in out
    assert "Example" in out
    assert "https://example.com" in out


def test_settings_assignment_is_clamped(data_dir, capsys) -> None:
    assert main(["--data-dir", data_dir, "set", "cols=99", "theme=light"]) == EXIT_OK
    assert main(["--data-dir", data_dir, "show"]) == EXIT_OK

    assert "theme=light cols=12" in capsys.readouterr().out


def test_bad_input_reports_error(data_dir, capsys) -> None:
    assert main(["--data-dir", data_dir, "set", "fontSize=3"]) == EXIT_FAILED
    assert main(["--data-dir", data_dir, "move-tile", "0", "9"]) == EXIT_FAILED
    assert main(["--data-dir", data_dir, "remove-page", "nope"]) == EXIT_FAILED

    err = capsys.readouterr().err
    assert "Unsupported settings keys: fontSize" in err
    assert "Index 9 is outside 0..3." in err
    assert "Page 'nope' not found." in err


def test_export_and_import_between_profiles(tmp_path, data_dir, capsys) -> None:
    backup = tmp_path / "backup.json"
    main(["--data-dir", data_dir, "add-page", "Reading"])
    assert main(["--data-dir", data_dir, "export", str(backup)]) == EXIT_OK

    other = str(tmp_path / "other")
    assert main(["--data-dir", other, "import", str(backup)]) == EXIT_OK
    capsys.readouterr()
    main(["--data-dir", other, "show"])

    assert "Reading" in capsys.readouterr().out
    assert json.loads(backup.read_text(encoding="utf-8"))["pages"][-1]["name"] == "Reading"


def test_import_legacy_file(tmp_path, data_dir, capsys) -> None:
    legacy = tmp_path / "sd2.json"
    legacy.write_text(
        json.dumps(
            {
                "groups": [{"id": 1, "title": "Home"}],
                "dials": [{"id": 5, "idgroup": 1, "title": "X", "url": "https://x.com", "position": 0}],
            }
        ),
        encoding="utf-8",
    )

    assert main(["--data-dir", data_dir, "import-legacy", str(legacy)]) == EXIT_OK
    main(["--data-dir", data_dir, "show"])

    out = capsys.readouterr().out
    assert "* [1] Home" in out
    assert "https://x.com" in out


def test_import_missing_file_fails(tmp_path, data_dir, capsys) -> None:
    assert main(["--data-dir", data_dir, "import", str(tmp_path / "absent.json")]) == EXIT_FAILED
    assert "Could not read" in capsys.readouterr().err


def test_quota_failure_exits_unsaved(data_dir, capsys) -> None:
    code = main(["--data-dir", data_dir, "--quota-bytes", "50", "add-tile", "example.com"])

    assert code == EXIT_UNSAVED
    assert "Local storage is full!" in capsys.readouterr().err


def test_reset_requires_confirmation(data_dir, capsys) -> None:
    main(["--data-dir", data_dir, "add-page", "Temp"])

    assert main(["--data-dir", data_dir, "reset"]) == EXIT_FAILED
    assert main(["--data-dir", data_dir, "reset", "--yes"]) == EXIT_OK
    capsys.readouterr()
    main(["--data-dir", data_dir, "show"])

    assert "Temp" not in capsys.readouterr().out


def test_note_and_search(data_dir, capsys) -> None:
    assert main(["--data-dir", data_dir, "note", "buy milk"]) == EXIT_OK
    assert main(["--data-dir", data_dir, "note"]) == EXIT_OK
    assert main(["--data-dir", data_dir, "search", "hello", "world"]) == EXIT_OK

    out = capsys.readouterr().out.splitlines()
    assert out == ["buy milk", "https://www.google.com/search?q=hello%20world"]


def test_weather_command_prints_reports(data_dir, capsys, monkeypatch) -> None:
    def _current(self, lat, lng, unit):
        return WeatherObservation(temperature=71.6, humidity_pct=40.2, wind_speed=5.4, is_day=False)

    monkeypatch.setattr(OpenMeteoWeather, "current", _current)

    assert main(["--data-dir", data_dir, "weather"]) == EXIT_OK
    assert "New York, NY: 72°F, humidity 40%, wind 5, night" in capsys.readouterr().out

    main(["--data-dir", data_dir, "set", "showWeather=false"])
    main(["--data-dir", data_dir, "weather"])
    assert "weather widget is off" in capsys.readouterr().out


def test_reset_keeps_unrelated_files(tmp_path, data_dir) -> None:
    main(["--data-dir", data_dir, "add-page", "Temp"])
    notes = tmp_path / "profile" / "my_notes.txt"
    notes.write_text("keep me", encoding="utf-8")

    assert main(["--data-dir", data_dir, "reset", "--yes"]) == EXIT_OK

    assert notes.read_text(encoding="utf-8") == "keep me"


def test_malformed_log_level_does_not_break_commands(data_dir, capsys, monkeypatch) -> None:
    monkeypatch.setenv("SPEEDDIAL_LOG_LEVEL", "²")

    assert main(["--data-dir", data_dir, "note", "still works"]) == EXIT_OK
    assert main(["--data-dir", data_dir, "note"]) == EXIT_OK

    assert capsys.readouterr().out.splitlines() == ["still works"]
