"""Tests for the command-line entry point."""

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from domain.fair_models import CheckResult, FairCheck
from interfaces.cli import app


runner = CliRunner()
URL = "https://dc.example/detail/S1?lang=en"


class TestCli:
    """Tests for argument handling and exit codes."""

    @pytest.mark.parametrize(
        "result,exit_code",
        [
            (CheckResult.PASS, 0),
            (CheckResult.FAIL, 1),
            (CheckResult.INDETERMINATE, 1),
        ],
    )
    def test_exit_code_follows_result(self, result, exit_code):
        with patch("interfaces.cli.run_check", new=AsyncMock(return_value=result)) as run_check:
            outcome = runner.invoke(app, ["access-rights", URL])

        assert outcome.exit_code == exit_code
        assert result.value in outcome.output
        assert run_check.await_args.args[:2] == (FairCheck.ACCESS_RIGHTS, URL)

    @pytest.mark.parametrize(
        "args",
        [
            [],
            ["access-rights"],
            ["unknown-check", URL],
            [URL, "access-rights"],
        ],
    )
    def test_invalid_arguments(self, args):
        with patch("interfaces.cli.run_check", new=AsyncMock()) as run_check:
            outcome = runner.invoke(app, args)

        assert outcome.exit_code == 1
        assert "Usage: fair-checks" in outcome.output
        run_check.assert_not_called()

    def test_dispatches_each_check(self):
        for check in FairCheck:
            with patch("interfaces.cli.run_check", new=AsyncMock(return_value=CheckResult.FAIL)) as run_check:
                runner.invoke(app, [check.value, URL])

            assert run_check.await_args.args[0] is check
