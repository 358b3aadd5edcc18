"""
Tests for application settings.
"""
from demoshop.core.config import Settings


class TestSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        """Test the documented defaults."""
        for name in ("API_PREFIX", "CART_STORAGE_KEY", "CHECKOUT_SUCCESS_DELAY", "REQUEST_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.API_PREFIX == "/api"
        assert settings.CART_STORAGE_KEY == "cart"
        assert settings.CHECKOUT_SUCCESS_DELAY == 2.0
        assert settings.REQUEST_TIMEOUT is None

    def test_environment_override(self, monkeypatch):
        """Test values are read from the environment."""
        monkeypatch.setenv("CHECKOUT_SUCCESS_DELAY", "0.5")
        monkeypatch.setenv("API_BASE_URL", "http://shop.test")

        settings = Settings(_env_file=None)

        assert settings.CHECKOUT_SUCCESS_DELAY == 0.5
        assert settings.API_BASE_URL == "http://shop.test"
