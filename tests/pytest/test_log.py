# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import logging
from types import SimpleNamespace

import pytest

from argbind.log import ColorMode, Logger, Loglevel, get_logger, resolve_color_mode
from argbind.opt import Opt
from argbind.tokens import TokenStream


@pytest.mark.parametrize(
    "raw,level",
    [
        ("trace", Loglevel.TRACE),
        ("DEBUG", Loglevel.DEBUG),
        ("notice", Loglevel.NOTICE),
        ("7", Loglevel.DEBUG),
        ("8", Loglevel.TRACE),
        ("3", Loglevel.ERROR),
        ("0", Loglevel.CRITICAL),
    ],
)
def test_loglevel_from_str(raw: str, level: Loglevel) -> None:
    assert Loglevel.from_str(raw) is level


@pytest.mark.parametrize("raw", ["loud", "9", "42"])
def test_loglevel_from_str_invalid(raw: str) -> None:
    with pytest.raises(ValueError, match="not a valid priority"):
        Loglevel.from_str(raw)


def test_custom_levels_registered() -> None:
    assert logging.getLevelName(5) == "TRACE"
    assert logging.getLevelName(25) == "NOTICE"
    assert isinstance(get_logger("argbind.test"), Logger)


def test_color_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_color_mode(ColorMode.NEVER) is False

    monkeypatch.setenv("NO_COLOR", "1")
    assert resolve_color_mode(ColorMode.AUTO) is False


def test_trace_records(caplog: pytest.LogCaptureFixture) -> None:
    ns = SimpleNamespace(verbose=False)
    with caplog.at_level(Loglevel.TRACE, logger="argbind"):
        Opt(ns, "verbose").name("-v").parse(TokenStream.from_args(["-v"]))

    assert any("flag -v matched" in r.getMessage() for r in caplog.records)
