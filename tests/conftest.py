"""
Pytest Configuration and Fixtures
==================================
Loads test tokens from environment and provides reusable fixtures.
"""

import json
import os
import sys
import pytest
from pathlib import Path
from unittest.mock import MagicMock

from requests import Session
from requests.structures import CaseInsensitiveDict
from dotenv import load_dotenv

# Add lib to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "lib"))

# Load test environment variables
env_file = project_root / ".env.test"
if env_file.exists():
    load_dotenv(env_file)
else:
    # Try loading from CI environment
    load_dotenv()


# =============================================================================
# HTTP DOUBLES
# =============================================================================

class FakeResponse:
    """
    Minimal stand-in for requests.Response.

    chunks may contain exception instances; iter_content raises them when
    reached, which simulates a connection dropping mid-stream.
    """

    def __init__(self, status_code=200, json_body=None, content=None, headers=None, chunks=None):
        self.status_code = status_code
        self._json = json_body
        if content is None:
            content = json.dumps(json_body).encode() if json_body is not None else b""
        self.content = content
        self.headers = CaseInsensitiveDict(headers or {})
        self._chunks = list(chunks or [])
        self.closed = False

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json

    def iter_content(self, chunk_size=1):
        for chunk in self._chunks:
            if isinstance(chunk, BaseException):
                raise chunk
            yield chunk

    def close(self):
        self.closed = True


@pytest.fixture
def make_response():
    """Factory for FakeResponse objects."""
    return FakeResponse


@pytest.fixture
def mock_session():
    """HTTP session double; configure request/get/head side effects per test."""
    return MagicMock(spec=Session)


@pytest.fixture
def settings():
    """Default provider settings, independent of the environment."""
    from companion.config import CompanionSettings

    return CompanionSettings()


# =============================================================================
# TOKEN FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def facebook_token():
    """Facebook user access token from environment."""
    token = os.getenv("TEST_FACEBOOK_ACCESS_TOKEN")
    if not token:
        pytest.skip("Facebook token not configured")
    return token


@pytest.fixture(scope="session")
def dropbox_token():
    """Dropbox access token from environment."""
    token = os.getenv("TEST_DROPBOX_ACCESS_TOKEN")
    if not token:
        pytest.skip("Dropbox token not configured")
    return token


@pytest.fixture(scope="session")
def dropbox_test_folder():
    """Dropbox test folder path."""
    return os.getenv("TEST_DROPBOX_TEST_FOLDER", "/Companion-Tests")


@pytest.fixture(scope="session")
def google_drive_token():
    """Google Drive access token from environment."""
    token = os.getenv("TEST_GDRIVE_ACCESS_TOKEN")
    if not token:
        pytest.skip("Google Drive token not configured")
    return token


@pytest.fixture(scope="session")
def google_drive_test_folder():
    """Google Drive test folder ID (None = My Drive root)."""
    return os.getenv("TEST_GDRIVE_TEST_FOLDER_ID") or None


@pytest.fixture(scope="session")
def encryption_key():
    """Fernet secret for testing."""
    key = os.getenv("TEST_ENCRYPTION_KEY")

    if not key:
        # Generate a temporary key for unit tests
        from cryptography.fernet import Fernet
        key = Fernet.generate_key().decode()

    return key


# =============================================================================
# PROVIDER FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def live_registry():
    """Registry with every provider over a real session."""
    from companion.config import CompanionSettings
    from companion.providers import ProviderRegistry

    return ProviderRegistry.from_settings(CompanionSettings.from_env())


# =============================================================================
# UTILITY FIXTURES
# =============================================================================

@pytest.fixture
def mock_env(monkeypatch):
    """Helper to mock environment variables."""
    def _mock_env(env_dict):
        for key, value in env_dict.items():
            monkeypatch.setenv(key, value)
    return _mock_env


# =============================================================================
# TEST MARKERS COLLECTION
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: Tests that call external APIs")
    config.addinivalue_line("markers", "facebook: Tests requiring a Facebook token")
    config.addinivalue_line("markers", "dropbox: Tests requiring a Dropbox token")
    config.addinivalue_line("markers", "google_drive: Tests requiring a Google Drive token")
