import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_ACRONYMS_PATH = Path(__file__).parent / "data" / "acronyms.yaml"
DEFAULT_SLACK_API_BASE_URL = "https://slack.com/api"
DEFAULT_SLACK_POST_TIMEOUT = 10.0
DEFAULT_SIGNATURE_HEADER = "X-Slack-Signature"
DEFAULT_TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"


def mask_secret(value: Optional[str]) -> str:
    """Renders a secret for logs without revealing it in full."""
    if not value:
        return "<unset>"
    if len(value) <= 8:
        return "****"
    return f"****{value[-4:]}"


@dataclass(frozen=True)
class Settings:
    # --- Slack Configuration ---
    slack_verification_token: str = field(repr=False)
    slack_oauth_access_token: str = field(repr=False)
    slack_signing_secret: str = field(repr=False)
    slack_api_base_url: str = DEFAULT_SLACK_API_BASE_URL
    # None means no timeout on the outbound chat.postMessage call
    slack_post_timeout: Optional[float] = DEFAULT_SLACK_POST_TIMEOUT
    signature_header: str = DEFAULT_SIGNATURE_HEADER
    timestamp_header: str = DEFAULT_TIMESTAMP_HEADER

    # --- Application Specific Settings ---
    acronyms_path: Path = DEFAULT_ACRONYMS_PATH

    @property
    def signing_secret_bytes(self) -> bytes:
        return self.slack_signing_secret.encode("utf-8")

    def validate(self):
        if not self.slack_verification_token:
            raise ValueError("SLACK_VERIFICATION_TOKEN not set in environment variables or .env file.")
        if not self.slack_oauth_access_token:
            raise ValueError("SLACK_OAUTH_ACCESS_TOKEN not set in environment variables or .env file.")
        if not self.slack_signing_secret:
            raise ValueError("SLACK_SIGNING_SECRET not set in environment variables or .env file.")

    def describe(self) -> dict:
        """Log-safe view of the configuration."""
        return {
            "slack_verification_token": mask_secret(self.slack_verification_token),
            "slack_oauth_access_token": mask_secret(self.slack_oauth_access_token),
            "slack_signing_secret": mask_secret(self.slack_signing_secret),
            "slack_api_base_url": self.slack_api_base_url,
            "slack_post_timeout": self.slack_post_timeout,
            "signature_header": self.signature_header,
            "timestamp_header": self.timestamp_header,
            "acronyms_path": str(self.acronyms_path),
        }


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return DEFAULT_SLACK_POST_TIMEOUT
    raw = raw.strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"SLACK_POST_TIMEOUT must be a number of seconds, got {raw!r}.")
    return timeout if timeout > 0 else None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Resolves the settings once, from the process environment by default.

    Reading the process environment also loads a ``.env`` file if one exists.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    return Settings(
        slack_verification_token=environ.get("SLACK_VERIFICATION_TOKEN", ""),
        slack_oauth_access_token=environ.get("SLACK_OAUTH_ACCESS_TOKEN", ""),
        slack_signing_secret=environ.get("SLACK_SIGNING_SECRET", ""),
        slack_api_base_url=environ.get("SLACK_API_BASE_URL", DEFAULT_SLACK_API_BASE_URL).rstrip("/"),
        slack_post_timeout=_parse_timeout(environ.get("SLACK_POST_TIMEOUT")),
        signature_header=environ.get("SLACK_SIGNATURE_HEADER", DEFAULT_SIGNATURE_HEADER),
        timestamp_header=environ.get("SLACK_TIMESTAMP_HEADER", DEFAULT_TIMESTAMP_HEADER),
        acronyms_path=Path(environ.get("ACRONYMS_PATH") or DEFAULT_ACRONYMS_PATH),
    )
