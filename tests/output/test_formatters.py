"""Tests for the format_result dispatcher and OutputSettings."""

import json

from monoctl.output.formatters import OutputSettings, format_result
from monoctl.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="ERR", message=msg),
    )


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok("order", count=2), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "order"
        assert data["data"]["count"] == 2

    def test_json_mode_error(self) -> None:
        output = format_result(_err("each", "Bad"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is False
        assert data["error"]["message"] == "Bad"

    def test_json_wins_over_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        json.loads(format_result(_ok(), settings=settings))


class TestFormatResultQuiet:
    def test_quiet_names(self) -> None:
        result = _ok("order", items=[{"name": "core"}, {"name": "web"}])
        assert format_result(result, settings=OutputSettings(quiet=True)) == "core\nweb"

    def test_quiet_error(self) -> None:
        output = format_result(_err("lint", "nope"), settings=OutputSettings(quiet=True))
        assert output.startswith("ERROR: lint")


class TestFormatResultDefault:
    def test_default_is_rich(self) -> None:
        output = format_result(_ok("custom", answer=42))
        assert "OK" in output
        assert "answer: 42" in output
