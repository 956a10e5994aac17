import pytest

from astralis.__main__ import main


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for key in (
        "ASTRALIS_CONFIG",
        "ASTRALIS_CAPTURE_STACK",
        "ASTRALIS_SINK_LOGGER",
        "ASTRALIS_ERROR_PAUSE",
        "ASTRALIS_MAX_MESSAGE_LENGTH",
    ):
        monkeypatch.delenv(key, raising=False)


def test_default_session_prints_counts_and_rows(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Log (5)  Warn (2)  Error (1)"
    assert any(line.endswith("WARN  [Physics] collision") for line in out)
    assert not any(line.startswith("Paused on error") for line in out)


def test_hide_category(capsys):
    assert main(["--hide", "Physics"]) == 0
    out = capsys.readouterr().out
    assert "collision" not in out
    assert out.splitlines()[0] == "Log (5)  Warn (1)  Error (1)"


def test_search_is_case_insensitive(capsys):
    assert main(["--search", "SAVE"]) == 0
    rows = capsys.readouterr().out.splitlines()[1:]
    assert len(rows) == 2
    assert all("save" in row.lower() for row in rows)


def test_hide_level(capsys):
    assert main(["--hide-level", "info", "--hide-level", "warning"]) == 0
    rows = capsys.readouterr().out.splitlines()[1:]
    assert len(rows) == 1
    assert "Could not write save slot 1" in rows[0]


def test_error_pause_flag(capsys):
    assert main(["--error-pause"]) == 0
    out = capsys.readouterr().out
    assert "Paused on error: Could not write save slot 1" in out


def test_bad_config_value_does_not_abort(tmp_path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("max_message_length: lots\nconsole_categories: Physics\n", encoding="utf-8")
    assert main(["--config", str(cfg)]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Log (5)  Warn (2)  Error (1)"
