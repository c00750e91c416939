"""
Pytest configuration and fixtures for the test suite.

Settings are built explicitly per test so no local .env or FRIDA_* variable
leaks into assertions about the outbound request.
"""

import pytest
from helpers import UPSTREAM_URL

from pictag.config import FridaSettings, Settings, get_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch):
    """Remove credential env vars and reset the cached settings."""
    monkeypatch.delenv("FRIDA_API_KEY", raising=False)
    monkeypatch.delenv("FRIDA__API_KEY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        frida=FridaSettings(api_key="test-key"),
        frida_completions_url=UPSTREAM_URL,
        upstream_timeout=5.0,
    )


@pytest.fixture
def sample_payload() -> dict:
    return {
        "model": "gpt-4o-mini",
        "messages": [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "Classify this image."},
                    {
                        "type": "image_url",
                        "image_url": {"url": "data:image/png;base64,iVBORw0KGgo=", "detail": "low"},
                    },
                ],
            }
        ],
        "stream": False,
        "enable_caching": True,
    }
