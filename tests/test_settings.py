"""Tests for settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sandpath.settings import DEFAULT_SANDBOX_PREFIX, SandpathSettings


class TestSandpathSettings:
    """Tests for SandpathSettings."""

    def test_defaults(self) -> None:
        """Test default values."""
        settings = SandpathSettings()

        assert settings.auto_expand_tilde is False
        assert settings.sandbox_prefix == DEFAULT_SANDBOX_PREFIX
        assert settings.temp_root is None

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test values are read from SANDPATH_* variables."""
        monkeypatch.setenv("SANDPATH_AUTO_EXPAND_TILDE", "true")
        monkeypatch.setenv("SANDPATH_SANDBOX_PREFIX", "ci_")
        monkeypatch.setenv("SANDPATH_TEMP_ROOT", "/scratch")
        monkeypatch.setenv("TEMP_ROOT", "/ignored")

        settings = SandpathSettings()

        assert settings.auto_expand_tilde is True
        assert settings.sandbox_prefix == "ci_"
        assert settings.temp_root == "/scratch"

    def test_empty_values_keep_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test empty variables do not override defaults."""
        monkeypatch.setenv("SANDPATH_SANDBOX_PREFIX", "")

        assert SandpathSettings().sandbox_prefix == DEFAULT_SANDBOX_PREFIX

    def test_arguments_override_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test explicit keyword arguments win over variables."""
        monkeypatch.setenv("SANDPATH_AUTO_EXPAND_TILDE", "1")

        assert SandpathSettings(auto_expand_tilde=False).auto_expand_tilde is False

    def test_invalid_bool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unparseable values raise ValidationError."""
        monkeypatch.setenv("SANDPATH_AUTO_EXPAND_TILDE", "maybe")

        with pytest.raises(ValidationError):
            SandpathSettings()

    def test_empty_prefix_rejected(self) -> None:
        """Test sandbox directories always get a prefix."""
        with pytest.raises(ValidationError):
            SandpathSettings(sandbox_prefix="")

    def test_frozen(self) -> None:
        """Test settings cannot be changed after creation."""
        settings = SandpathSettings()

        with pytest.raises(ValidationError):
            settings.auto_expand_tilde = True  # type: ignore[misc]
