"""Tests for basis.executor module."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from basis.errors import MissingArgument, SubprocessFailure, UnresolvableTarget
from basis.executor import EXIT_NOT_EXECUTABLE, EXIT_NOT_FOUND, ExecConfig, Executor, normalize_command
from basis.quoting import to_string
from basis.registry import Registry
from basis.resolver import Resolver

PYTHON = sys.executable


def _executor(tmp_path: Path, **config) -> Executor:
    registry = Registry.from_properties(
        [("proj.sub.tool", "LOCATION", "bin/tool")],
        base_dir=tmp_path,
        namespace="proj.sub",
    )
    return Executor(Resolver(registry), ExecConfig(**config))


class TestNormalizeCommand:
    """Tests for normalize_command."""

    def test_sequence(self) -> None:
        assert normalize_command(["tool", "a b"]) == ["tool", "a b"]

    def test_name_and_args(self) -> None:
        assert normalize_command("tool", ("a b", "c")) == ["tool", "a b", "c"]

    def test_command_line_is_split(self) -> None:
        assert normalize_command('tool "a b" c') == ["tool", "a b", "c"]

    def test_args_are_stringified(self) -> None:
        assert normalize_command(["tool", Path("x/y"), 3]) == ["tool", "x/y", "3"]

    @pytest.mark.parametrize("command", [[], "", "   ", [""]])
    def test_missing_command(self, command) -> None:
        with pytest.raises(MissingArgument):
            normalize_command(command)

    def test_unterminated_quote(self) -> None:
        with pytest.raises(MissingArgument, match="Unterminated"):
            normalize_command('tool "-c')


class TestExecute:
    """Tests for Executor.execute."""

    def test_returns_zero_on_success(self, tmp_path: Path) -> None:
        assert _executor(tmp_path).execute(PYTHON, "-c", "pass") == 0

    def test_failure_raises_with_command_line(self, tmp_path: Path) -> None:
        with pytest.raises(SubprocessFailure) as excinfo:
            _executor(tmp_path).execute([PYTHON, "-c", "import sys; sys.exit(2)"])

        assert excinfo.value.returncode == 2
        assert excinfo.value.cmdline == to_string([PYTHON, "-c", "import sys; sys.exit(2)"])
        assert str(excinfo.value) == f"Command {excinfo.value.cmdline} failed"

    def test_allow_fail_returns_status(self, tmp_path: Path) -> None:
        status = _executor(tmp_path, allow_fail=True).execute(PYTHON, "-c", "import sys; sys.exit(2)")
        assert status == 2

    def test_verbose_prints_command_line(self, tmp_path: Path, capfd) -> None:
        _executor(tmp_path, verbose=1).execute(PYTHON, "-c", "print('child')")

        out = capfd.readouterr().out.splitlines()
        assert out == [to_string([PYTHON, "-c", "print('child')"]), "child"]

    def test_quiet_discards_output(self, tmp_path: Path, capfd) -> None:
        _executor(tmp_path, quiet=True).execute(PYTHON, "-c", "print('child')")

        assert capfd.readouterr().out == ""

    def test_output_is_not_captured(self, tmp_path: Path, capfd) -> None:
        _executor(tmp_path).execute(PYTHON, "-c", "import sys; print('out'); print('err', file=sys.stderr)")

        captured = capfd.readouterr()
        assert captured.out == "out\n"
        assert captured.err == "err\n"

    def test_simulate_prints_and_does_not_spawn(self, tmp_path: Path, capsys) -> None:
        with patch("basis.executor.subprocess.run") as mock_run:
            status = _executor(tmp_path, simulate=True).execute("tool", "a b", "")

        assert status == 0
        mock_run.assert_not_called()
        expected = to_string([str(tmp_path.resolve() / "bin" / "tool"), "a b", ""])
        assert capsys.readouterr().out == expected + "\n"

    def test_runs_resolved_target_path(self, tmp_path: Path) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=0)
        with patch("basis.executor.subprocess.run", return_value=completed) as mock_run:
            _executor(tmp_path).execute("tool", "--flag")

        argv = mock_run.call_args.args[0]
        assert argv == [str(tmp_path.resolve() / "bin" / "tool"), "--flag"]
        assert mock_run.call_args.kwargs["stdout"] is None
        assert mock_run.call_count == 1

    def test_unresolvable_command_raises(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("PATH", str(tmp_path))
        with pytest.raises(UnresolvableTarget):
            _executor(tmp_path).execute("no-such-tool")

    def test_missing_target_file(self, tmp_path: Path) -> None:
        with pytest.raises(SubprocessFailure) as excinfo:
            _executor(tmp_path).execute("tool")
        assert excinfo.value.returncode == EXIT_NOT_FOUND

        assert _executor(tmp_path, allow_fail=True).execute("tool") == EXIT_NOT_FOUND

    def test_permission_error_maps_to_not_executable(self, tmp_path: Path) -> None:
        with patch("basis.executor.subprocess.run", side_effect=PermissionError("denied")):
            status = _executor(tmp_path, allow_fail=True).execute("tool")
        assert status == EXIT_NOT_EXECUTABLE
