"""Shared fixtures for the SBOM workbench tests."""

import copy

import pytest
from fastapi.testclient import TestClient

from config import AppConfig
from core.exceptions import NvdConfigurationError, NvdUpstreamError
from core.interface import INvdClient
from infrastructure.persistence.env_file import EnvFileSettingsStore
from infrastructure.persistence.memory import InMemorySbomRepository
from main import create_app

MINIMAL_METADATA = {
    "timestamp": "2024-05-01T12:00:00Z",
    "tools": [{"vendor": "Acme", "name": "sbom-editor", "version": "1.0"}],
    "authors": [{"name": "Sam Doe"}],
}


class FakeNvdClient(INvdClient):
    """In-process stand-in for the NVD adapter."""

    def __init__(self, settings):
        self.settings = settings
        self.products = []
        self.cves = []
        self.error = None
        self.key_accepted = True
        self.calls = []

    def _call(self, name, argument):
        self.calls.append((name, argument))
        if not self.settings.get_nvd_api_key():
            raise NvdConfigurationError()
        if self.error:
            raise self.error

    def search_products(self, keyword):
        self._call("search", keyword)
        return self.products

    def match_products(self, cpe_match_string):
        self._call("versions", cpe_match_string)
        return self.products

    def get_cves(self, cpe_name):
        self._call("cves", cpe_name)
        return self.cves

    def check_api_key(self, api_key):
        self.calls.append(("check", api_key))
        if self.error:
            raise self.error
        return self.key_accepted


@pytest.fixture
def sbom_payload():
    """Demo SBOM with one library component and minimal metadata."""
    return {
        "name": "demo",
        "version": "1.0",
        "format": "CycloneDX",
        "components": [{"name": "libfoo", "version": "1.2", "type": "library"}],
        "metadata": copy.deepcopy(MINIMAL_METADATA),
    }


@pytest.fixture
def full_component():
    return {
        "name": "http_server",
        "version": "2.4.57",
        "type": "application",
        "supplier": "Apache Software Foundation",
        "author": "Apache Software Foundation",
        "description": "HTTP server",
        "licenses": ["Apache-2.0"],
        "purl": "pkg:generic/httpd@2.4.57",
        "cpe": "cpe:2.3:a:apache:http_server:2.4.57:*:*:*:*:*:*:*",
        "hashes": [{"algorithm": "SHA-256", "value": "deadbeef"}],
        "downloadLocation": "https://httpd.apache.org/download.cgi",
        "homepage": "https://httpd.apache.org",
        "copyrightText": "Copyright The Apache Software Foundation",
    }


@pytest.fixture
def settings_store(tmp_path):
    return EnvFileSettingsStore(str(tmp_path / ".env"))


@pytest.fixture
def fake_nvd(settings_store):
    return FakeNvdClient(settings_store)


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(env_file=str(tmp_path / ".env"))


@pytest.fixture
def client(app_config, settings_store, fake_nvd):
    app = create_app(
        config=app_config,
        repository=InMemorySbomRepository(),
        settings_store=settings_store,
        nvd_client=fake_nvd,
    )
    return TestClient(app)


@pytest.fixture
def upstream_error():
    return NvdUpstreamError("cpes/2.0", "Service Unavailable", status_code=503)
