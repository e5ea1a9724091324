"""Unit tests for environment credential loading."""

import os
from unittest.mock import patch

import pytest

from chatgate.config import Credentials, azure_api_version, load_credentials
from chatgate.errors import ConfigurationError
from chatgate.providers import DEFAULT_OPENAI_ENDPOINT, ApiType


def load(api_type: ApiType, env: dict[str, str]) -> Credentials:
    with patch.dict(os.environ, env, clear=True):
        return load_credentials(api_type, use_dotenv=False)


class TestLoadCredentials:
    """Tests for load_credentials."""

    def test_openai(self):
        credentials = load(ApiType.OPENAI, {"OPENAI_API_KEY": "sk-1"})
        assert credentials == Credentials(endpoint=DEFAULT_OPENAI_ENDPOINT, api_key="sk-1")

    def test_openai_endpoint_override(self):
        credentials = load(
            ApiType.OPENAI,
            {"OPENAI_API_KEY": "sk-1", "OPENAI_ENDPOINT": "http://localhost:8080/v1"},
        )
        assert credentials.endpoint == "http://localhost:8080/v1"

    def test_openai_missing_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load(ApiType.OPENAI, {})
        assert exc_info.value.variable == "OPENAI_API_KEY"
        assert exc_info.value.api_type == "openai"

    def test_empty_value_counts_as_missing(self):
        with pytest.raises(ConfigurationError):
            load(ApiType.OPENAI, {"OPENAI_API_KEY": ""})

    def test_azure(self):
        credentials = load(
            ApiType.AZURE,
            {"AZURE_OPENAI_API_KEY": "az-1", "AZURE_OPENAI_ENDPOINT": "https://r.azure.com/"},
        )
        assert credentials.api_key == "az-1"
        assert credentials.endpoint == "https://r.azure.com/"

    def test_azure_missing_endpoint(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load(ApiType.AZURE, {"AZURE_OPENAI_API_KEY": "az-1"})
        assert exc_info.value.variable == "AZURE_OPENAI_ENDPOINT"

    def test_azure_missing_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load(ApiType.AZURE, {"AZURE_OPENAI_ENDPOINT": "https://r.azure.com/"})
        assert exc_info.value.variable == "AZURE_OPENAI_API_KEY"

    def test_managed_identity_ignores_key(self):
        credentials = load(
            ApiType.AZURE_AD,
            {"AZURE_OPENAI_API_KEY": "az-1", "AZURE_OPENAI_ENDPOINT": "https://r.azure.com/"},
        )
        assert credentials.api_key == ""
        assert credentials.endpoint == "https://r.azure.com/"

    def test_secret_not_in_repr(self):
        credentials = Credentials(endpoint="https://r.azure.com/", api_key="az-secret")
        assert "az-secret" not in repr(credentials)

    def test_dotenv_loaded_by_default(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-1"}, clear=True):
            with patch("chatgate.config.load_dotenv") as mock_load:
                load_credentials(ApiType.OPENAI)
        mock_load.assert_called_once_with()


class TestApiVersion:
    """Tests for azure_api_version."""

    def test_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert azure_api_version() == "2023-05-15"

    def test_from_env(self):
        with patch.dict(os.environ, {"AZURE_OPENAI_API_VERSION": "2024-02-01"}, clear=True):
            assert azure_api_version() == "2024-02-01"
