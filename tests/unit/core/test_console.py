from __future__ import annotations

import io

from udpecho.core.console import BRIGHT_GREEN, RESET, Console, color_enabled


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_color_modes(monkeypatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert color_enabled("always", io.StringIO())
    assert not color_enabled("never", _Tty())
    assert not color_enabled("auto", io.StringIO())
    assert color_enabled("auto", _Tty())


def test_no_color_env_disables_auto(monkeypatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    assert not color_enabled("auto", _Tty())
    assert color_enabled("always", _Tty())


def test_info_and_error_streams() -> None:
    out, err = io.StringIO(), io.StringIO()
    console = Console(out, err, color="always")
    console.info("hello")
    console.error("broken")
    assert out.getvalue() == f"{BRIGHT_GREEN}hello{RESET}\n"
    # Errors are never coloured.
    assert err.getvalue() == "broken\n"
