import ssl
from pathlib import Path

import certifi
import httpx
import pytest

from opsmngr.core.client import OpsManagerClient, ca_validate, set_digest_auth, skip_verify
from opsmngr.core.config import (
    EnvConfig,
    create_client_from_env,
    load_env_config,
    options_from_config,
)
from opsmngr.core.errors import ConfigurationError

ENV_VARS = (
    "OPSMNGR_BASE_URL",
    "OPSMNGR_PUBLIC_API_KEY",
    "OPSMNGR_PRIVATE_API_KEY",
    "OPSMNGR_SKIP_VERIFY",
    "OPSMNGR_CA_CERT_FILE",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep load_dotenv away from any developer .env
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_skip_verify_builds_unverified_default_transport():
    client = OpsManagerClient(skip_verify())
    assert client.verify is False
    assert isinstance(client.transport, httpx.AsyncHTTPTransport)


def test_skip_verify_never_replaces_a_supplied_transport():
    supplied = httpx.AsyncHTTPTransport(retries=3)
    with pytest.raises(ConfigurationError, match="supplied AsyncHTTPTransport"):
        OpsManagerClient(skip_verify(), transport=supplied)


def test_supplied_transport_is_used_as_is():
    supplied = httpx.AsyncHTTPTransport(retries=3)
    client = OpsManagerClient(transport=supplied)
    assert client.transport is supplied


def test_ca_validate_accepts_pem_bundle():
    pem = Path(certifi.where()).read_text(encoding="utf-8")
    client = OpsManagerClient(ca_validate(pem))
    assert isinstance(client.verify, ssl.SSLContext)
    assert isinstance(client.transport, httpx.AsyncHTTPTransport)


@pytest.mark.parametrize("pem", ["", "   ", "not a certificate"])
def test_ca_validate_rejects_bad_bundle(pem):
    with pytest.raises(ConfigurationError):
        OpsManagerClient(ca_validate(pem))


def test_tls_options_reject_supplied_transport():
    transport = httpx.MockTransport(lambda request: httpx.Response(200))
    with pytest.raises(ConfigurationError, match="MockTransport"):
        OpsManagerClient(skip_verify(), transport=transport)
    with pytest.raises(ConfigurationError, match="MockTransport"):
        OpsManagerClient(ca_validate("pem"), transport=transport)


def test_digest_auth_option():
    client = OpsManagerClient(set_digest_auth("public", "private"))
    assert isinstance(client.auth, httpx.DigestAuth)
    with pytest.raises(ConfigurationError):
        OpsManagerClient(set_digest_auth("public", ""))


def test_load_env_config(clean_env):
    clean_env.setenv("OPSMNGR_BASE_URL", " https://om.example.com/api/public/v1.0/ ")
    clean_env.setenv("OPSMNGR_PUBLIC_API_KEY", "pub")
    clean_env.setenv("OPSMNGR_PRIVATE_API_KEY", "priv")
    clean_env.setenv("OPSMNGR_SKIP_VERIFY", "yes")

    cfg = load_env_config(use_dotenv=False)
    assert cfg == EnvConfig(
        base_url="https://om.example.com/api/public/v1.0/",
        public_api_key="pub",
        private_api_key="priv",
        skip_verify=True,
        ca_cert_file=None,
    )


def test_create_client_from_env(clean_env):
    clean_env.setenv("OPSMNGR_BASE_URL", "https://om.example.com/api/public/v1.0/")
    clean_env.setenv("OPSMNGR_PUBLIC_API_KEY", "pub")
    clean_env.setenv("OPSMNGR_PRIVATE_API_KEY", "priv")
    clean_env.setenv("OPSMNGR_CA_CERT_FILE", certifi.where())

    client = create_client_from_env()
    assert str(client.base_url) == "https://om.example.com/api/public/v1.0/"
    assert isinstance(client.auth, httpx.DigestAuth)


def test_empty_env_gives_defaults(clean_env):
    assert options_from_config(load_env_config(use_dotenv=False)) == []


def test_tls_settings_are_mutually_exclusive():
    with pytest.raises(ConfigurationError, match="mutually exclusive"):
        options_from_config(EnvConfig(skip_verify=True, ca_cert_file="/tmp/ca.pem"))


def test_unreadable_ca_file(tmp_path):
    with pytest.raises(ConfigurationError):
        options_from_config(EnvConfig(ca_cert_file=str(tmp_path / "missing.pem")))
