"""Runtime configuration for enrollflow, read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

ENV_PREFIX = "ENROLLFLOW_"


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass
class Settings:
    """Service settings.

    Attributes:
        db_path: SQLite database file (":memory:" for a throwaway store).
        evidence_base_url: Public base URL of the payment evidence bucket.
        notify_webhook_url: Mail relay endpoint; empty means log notifications.
        notify_token: Bearer token for the mail relay.
        notify_timeout: Relay request timeout in seconds.
        notify_in_background: Deliver notifications on a background thread.
        host: Bind address for the HTTP server.
        port: Bind port for the HTTP server.
    """

    db_path: str = "enrollflow.db"
    evidence_base_url: str = ""
    notify_webhook_url: str = ""
    notify_token: str | None = None
    notify_timeout: float = 10.0
    notify_in_background: bool = True
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``ENROLLFLOW_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ConfigError: If a numeric or boolean variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str, default: str) -> str:
            return env.get(f"{ENV_PREFIX}{name}", default)

        return cls(
            db_path=get("DB_PATH", defaults.db_path),
            evidence_base_url=get("EVIDENCE_BASE_URL", defaults.evidence_base_url),
            notify_webhook_url=get("NOTIFY_WEBHOOK_URL", defaults.notify_webhook_url),
            notify_token=env.get(f"{ENV_PREFIX}NOTIFY_TOKEN") or None,
            notify_timeout=_parse_float("NOTIFY_TIMEOUT", get("NOTIFY_TIMEOUT", str(defaults.notify_timeout))),
            notify_in_background=_parse_bool(
                "NOTIFY_IN_BACKGROUND", get("NOTIFY_IN_BACKGROUND", "true")
            ),
            host=get("HOST", defaults.host),
            port=_parse_int("PORT", get("PORT", str(defaults.port))),
        )


def _parse_float(name: str, value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number, got {value!r}") from e
    if parsed <= 0:
        raise ConfigError(f"{ENV_PREFIX}{name} must be positive, got {value!r}")
    return parsed


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}") from e


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"{ENV_PREFIX}{name} must be a boolean, got {value!r}")
