"""Tests for configuration loading."""

import os

import pytest
from unittest.mock import Mock

from foxden_doi.utils.config import Config
from foxden_doi.utils.credential_manager import CredentialStorageError


@pytest.fixture
def clean_env(monkeypatch):
    """Give each test a private copy of the environment without FOXDEN_* variables."""
    env = {key: value for key, value in os.environ.items() if not key.startswith("FOXDEN_")}
    monkeypatch.setattr(os, "environ", env)
    return monkeypatch


@pytest.fixture
def credentials():
    store = Mock()
    store.get_secret.return_value = None
    return store


class TestConfigDefaults:
    """Test default values."""

    def test_token_expiry_default(self):
        """Test that an unset token lifetime means 7200 seconds."""
        assert Config().effective_token_expires == 7200
        assert Config(token_expires=0).effective_token_expires == 7200
        assert Config(token_expires=60).effective_token_expires == 60


class TestConfigFromEnv:
    """Test Config.from_env."""

    def test_reads_environment(self, clean_env, credentials, tmp_path):
        """Test that FOXDEN_* variables populate the config."""
        clean_env.setenv("FOXDEN_METADATA_URL", "https://meta.example.org")
        clean_env.setenv("FOXDEN_DISCOVERY_URL", "https://discovery.example.org")
        clean_env.setenv("FOXDEN_TOKEN_EXPIRES", "300")
        clean_env.setenv("FOXDEN_AUTHZ_CLIENT_ID", "client")

        config = Config.from_env(env_file=str(tmp_path / "missing.env"), credentials=credentials)

        assert config.metadata_url == "https://meta.example.org"
        assert config.discovery_url == "https://discovery.example.org"
        assert config.token_expires == 300
        assert config.authz_client_id == "client"

    def test_reads_env_file(self, clean_env, credentials, tmp_path):
        """Test that settings are loaded from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("FOXDEN_ZENODO_URL=https://sandbox.zenodo.org/api\nFOXDEN_MC_PROJECT_ID=12\n")

        config = Config.from_env(env_file=str(env_file), credentials=credentials)

        assert config.zenodo_url == "https://sandbox.zenodo.org/api"
        assert config.mc_project_id == 12

    def test_secrets_from_credential_store(self, clean_env, credentials, tmp_path):
        """Test that missing secrets come from the credential store."""
        clean_env.setenv("FOXDEN_DATACITE_PASSWORD", "from-env")
        credentials.get_secret.side_effect = lambda name: {"zenodo_token": "from-keyring"}.get(name)

        config = Config.from_env(env_file=str(tmp_path / "missing.env"), credentials=credentials)

        assert config.zenodo_token == "from-keyring"
        assert config.datacite_password == "from-env"
        requested = [call.args[0] for call in credentials.get_secret.call_args_list]
        assert "datacite_password" not in requested
        assert "zenodo_token" in requested

    def test_invalid_integer(self, clean_env, credentials, tmp_path):
        """Test that a non-numeric integer setting raises ValueError."""
        clean_env.setenv("FOXDEN_TIMEOUT", "soon")

        with pytest.raises(ValueError, match="FOXDEN_TIMEOUT"):
            Config.from_env(env_file=str(tmp_path / "missing.env"), credentials=credentials)

    def test_unavailable_credential_store(self, clean_env, credentials, tmp_path):
        """Test that a missing keyring backend leaves secrets unset."""
        credentials.get_secret.side_effect = CredentialStorageError("no backend")

        config = Config.from_env(env_file=str(tmp_path / "missing.env"), credentials=credentials)

        assert config.zenodo_token == ""
        assert credentials.get_secret.call_count == 1
