"""Tests for basis.config module."""

from __future__ import annotations

from pathlib import Path

from basis.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_from_env(self) -> None:
        settings = Settings.from_env({"BASIS_TARGETS": "/opt/proj/targets.yaml", "BASIS_NAMESPACE": "proj.sub"})

        assert settings.targets_file == Path("/opt/proj/targets.yaml")
        assert settings.namespace == "proj.sub"

    def test_from_env_blank_values(self) -> None:
        settings = Settings.from_env({"BASIS_TARGETS": "  ", "BASIS_NAMESPACE": ""})

        assert settings == Settings()

    def test_from_process_environment(self, monkeypatch) -> None:
        monkeypatch.delenv("BASIS_TARGETS", raising=False)
        monkeypatch.setenv("BASIS_NAMESPACE", "proj")

        assert Settings.from_env() == Settings(namespace="proj")

    def test_override(self) -> None:
        base = Settings(targets_file=Path("a.yaml"), namespace="proj")

        assert base.override() is base
        assert base.override(namespace="other") == Settings(targets_file=Path("a.yaml"), namespace="other")
        assert base.override(targets_file="b.yaml").targets_file == Path("b.yaml")
