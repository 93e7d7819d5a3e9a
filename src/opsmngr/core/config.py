from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .client import (
    ClientOption,
    OpsManagerClient,
    ca_validate,
    set_base_url,
    set_digest_auth,
    skip_verify,
)
from .errors import ConfigurationError


def _get_bool_env(name: str, default: bool) -> bool:
    """Parse a boolean environment variable with a safe default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


@dataclass(frozen=True)
class EnvConfig:
    base_url: str = ""
    public_api_key: str = ""
    private_api_key: str = ""
    skip_verify: bool = False
    ca_cert_file: Optional[str] = None


def load_env_config(*, use_dotenv: bool = True) -> EnvConfig:
    """Read OPSMNGR_* settings from the environment (optionally a .env file)."""
    if use_dotenv:
        load_dotenv()
    return EnvConfig(
        base_url=os.getenv("OPSMNGR_BASE_URL", "").strip(),
        public_api_key=os.getenv("OPSMNGR_PUBLIC_API_KEY", "").strip(),
        private_api_key=os.getenv("OPSMNGR_PRIVATE_API_KEY", "").strip(),
        skip_verify=_get_bool_env("OPSMNGR_SKIP_VERIFY", False),
        ca_cert_file=os.getenv("OPSMNGR_CA_CERT_FILE", "").strip() or None,
    )


def options_from_config(config: EnvConfig) -> List[ClientOption]:
    if config.skip_verify and config.ca_cert_file:
        raise ConfigurationError(
            "OPSMNGR_SKIP_VERIFY and OPSMNGR_CA_CERT_FILE are mutually exclusive."
        )

    options: List[ClientOption] = []
    if config.base_url:
        options.append(set_base_url(config.base_url))
    if config.public_api_key or config.private_api_key:
        options.append(set_digest_auth(config.public_api_key, config.private_api_key))
    if config.skip_verify:
        options.append(skip_verify())
    if config.ca_cert_file:
        try:
            pem = Path(config.ca_cert_file).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                f"cannot read CA bundle {config.ca_cert_file}: {exc}"
            ) from exc
        options.append(ca_validate(pem))
    return options


def create_client_from_env(*extra: ClientOption, **kwargs) -> OpsManagerClient:
    """Create an OpsManagerClient from OPSMNGR_* variables, then apply extra options."""
    config = load_env_config()
    return OpsManagerClient(*options_from_config(config), *extra, **kwargs)


__all__ = [
    "EnvConfig",
    "load_env_config",
    "options_from_config",
    "create_client_from_env",
]
