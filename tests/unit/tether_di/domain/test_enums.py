"""Unit tests for domain enums."""

import pytest

from tether_di.domain.enums import Lifetime


class TestLifetime:
    """Test cases for the Lifetime enum."""

    def test_lifetime_values(self):
        """Test that each lifetime has the expected string value."""
        assert Lifetime.TRANSIENT.value == "transient"
        assert Lifetime.SCOPED.value == "scoped"
        assert Lifetime.SINGLETON.value == "singleton"

    def test_lifetime_has_three_members(self):
        """Test that only the three documented lifetimes exist."""
        assert {member.name for member in Lifetime} == {"TRANSIENT", "SCOPED", "SINGLETON"}

    def test_lifetime_is_str(self):
        """Test that Lifetime members compare equal to their string values."""
        assert Lifetime.SINGLETON == "singleton"
        assert isinstance(Lifetime.TRANSIENT, str)

    def test_lifetime_str_returns_value(self):
        """Test string conversion returns the raw value."""
        assert str(Lifetime.SCOPED) == "scoped"
        assert f"{Lifetime.SINGLETON}" == "singleton"

    def test_lifetime_from_string(self):
        """Test constructing a Lifetime from its value."""
        assert Lifetime("transient") is Lifetime.TRANSIENT

    def test_lifetime_from_invalid_string(self):
        """Test that unknown values are rejected."""
        with pytest.raises(ValueError):
            Lifetime("request")

    @pytest.mark.parametrize(
        "lifetime, expected",
        [
            (Lifetime.TRANSIENT, False),
            (Lifetime.SCOPED, True),
            (Lifetime.SINGLETON, True),
        ],
    )
    def test_is_cached(self, lifetime, expected):
        """Test which lifetimes keep instances in a cache."""
        assert lifetime.is_cached is expected
