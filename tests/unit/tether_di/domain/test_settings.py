"""Unit tests for container settings."""

from tether_di.domain import ContainerSettings


class TestContainerSettings:
    """Test cases for ContainerSettings."""

    def test_defaults(self, monkeypatch):
        """Test default values when no environment variables are set."""
        for name in ("TETHER_DI_THREAD_SAFE", "TETHER_DI_ALLOW_OVERRIDE", "TETHER_DI_WARN_ON_OVERRIDE"):
            monkeypatch.delenv(name, raising=False)

        settings = ContainerSettings()

        assert settings.thread_safe is True
        assert settings.allow_override is True
        assert settings.warn_on_override is False

    def test_reads_environment(self, monkeypatch):
        """Test that TETHER_DI_* variables override defaults."""
        monkeypatch.setenv("TETHER_DI_THREAD_SAFE", "false")
        monkeypatch.setenv("TETHER_DI_ALLOW_OVERRIDE", "0")
        monkeypatch.setenv("TETHER_DI_WARN_ON_OVERRIDE", "true")

        settings = ContainerSettings()

        assert settings.thread_safe is False
        assert settings.allow_override is False
        assert settings.warn_on_override is True

    def test_explicit_arguments_win(self, monkeypatch):
        """Test that constructor arguments take precedence over the environment."""
        monkeypatch.setenv("TETHER_DI_ALLOW_OVERRIDE", "false")

        settings = ContainerSettings(allow_override=True)

        assert settings.allow_override is True

    def test_unrelated_environment_is_ignored(self, monkeypatch):
        """Test that unknown prefixed variables do not fail validation."""
        monkeypatch.setenv("TETHER_DI_SOMETHING_ELSE", "1")

        ContainerSettings()
