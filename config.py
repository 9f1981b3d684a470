"""
Environment configuration for the Okta MCP server.

Values are read once at startup. A .env file in the project root is loaded
first so local development does not need exported variables.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# Load .env from project root (same directory as this file)
PROJECT_ROOT = Path(__file__).resolve().parent
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_HTTP_TIMEOUT = 30.0

TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigurationError(Exception):
    """Required configuration is missing or malformed."""


def _normalize_domain(domain: str) -> str:
    domain = domain.strip()
    for scheme in ("https://", "http://"):
        if domain.lower().startswith(scheme):
            domain = domain[len(scheme):]
    return domain.rstrip("/")


@dataclass(frozen=True)
class OktaSettings:
    domain: str
    token: str
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    sanitize_single_responses: bool = False

    @property
    def org_url(self) -> str:
        return f"https://{self.domain}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OktaSettings":
        """
        Build settings from the process environment.

        OKTA_DOMAIN and OKTA_API_TOKEN are required (API_TOKEN is accepted as
        an alternative name for the token). Raises ConfigurationError when
        either is missing or an optional value cannot be parsed.
        """
        env = os.environ if environ is None else environ

        domain = _normalize_domain(env.get("OKTA_DOMAIN", ""))
        token = (env.get("OKTA_API_TOKEN") or env.get("API_TOKEN") or "").strip()

        if not domain:
            raise ConfigurationError(
                "OKTA_DOMAIN environment variable is required "
                "(e.g. OKTA_DOMAIN=your-domain.okta.com)"
            )
        if not token:
            raise ConfigurationError(
                "OKTA_API_TOKEN environment variable is required "
                "(e.g. OKTA_API_TOKEN=your-api-token)"
            )

        raw_timeout = env.get("OKTA_HTTP_TIMEOUT")
        try:
            http_timeout = float(raw_timeout) if raw_timeout else DEFAULT_HTTP_TIMEOUT
        except ValueError:
            raise ConfigurationError(f"OKTA_HTTP_TIMEOUT must be a number, got {raw_timeout!r}")
        if http_timeout <= 0:
            raise ConfigurationError("OKTA_HTTP_TIMEOUT must be greater than zero")

        sanitize_single = env.get("OKTA_SANITIZE_SINGLE_RESPONSES", "false").strip().lower() in TRUE_VALUES

        return cls(
            domain=domain,
            token=token,
            http_timeout=http_timeout,
            sanitize_single_responses=sanitize_single,
        )
