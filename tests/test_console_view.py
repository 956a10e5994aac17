import re

from astralis.console.hub import LogConsole
from astralis.console.view import ConsoleView, truncate
from astralis.debug.facility import LogFacility, Severity


def _session():
    facility = LogFacility(sink=lambda severity, text: None)
    console = LogConsole(facility).attach()
    return facility, console


def test_truncate_long_messages():
    assert truncate("short") == "short"
    text = "x" * 600
    cut = truncate(text)
    assert len(cut) == 500
    assert cut.endswith("...")
    assert truncate("abcdefgh", limit=6) == "abc..."
    assert truncate("abcdef", limit=6) == "abcdef"


def test_rows_carry_color_time_and_truncated_text():
    facility, console = _session()
    facility.warn("General", "y" * 520)
    facility.log("Unregistered", "plain")

    rows = ConsoleView(console).rows()

    assert [r.severity for r in rows] == [Severity.WARNING, Severity.INFO]
    assert rows[0].color_hex == "CCCCCC"
    assert rows[1].color_hex == "FFFFFF"
    assert len(rows[0].text) == 500
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", rows[0].time)
    assert rows[0].stack


def test_rows_follow_console_filters():
    facility, console = _session()
    facility.log("Player", "visible")
    facility.log("Enemy", "hidden")
    console.set_category_enabled("Enemy", False)

    assert [r.text for r in ConsoleView(console).rows()] == ["visible"]


def test_toolbar_labels_show_counts():
    facility, console = _session()
    facility.log("UI", "a")
    facility.log("UI", "b")
    facility.error("UI", "c")
    assert ConsoleView(console).toolbar_labels() == ["Log (2)", "Warn (0)", "Error (1)"]


def test_render_lines_plain_text():
    facility, console = _session()
    facility.warn("Physics", "collision")
    lines = ConsoleView(console, max_message_length=50).render_lines()
    assert len(lines) == 1
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2} WARN  \[Physics\] collision", lines[0])
