"""Runtime settings for reaching the intake endpoint."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from intake.core.utils import get_config_value, load_env_file

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_URL = "https://hook.eu2.make.com/pe4x8bw7zt813js84ln78r4lwfh2gb99"
DEFAULT_ENV_FILE = Path("secrets/intake.env")
_ENV_LOADED = False


def _ensure_intake_env() -> None:
    """Populate intake env vars from secrets/intake.env once per process."""

    global _ENV_LOADED
    if _ENV_LOADED:
        return
    _ENV_LOADED = True

    env_path = Path(os.getenv("INTAKE_ENV_FILE", DEFAULT_ENV_FILE))
    load_env_file(env_path)


def _parse_timeout(raw: str) -> Optional[float]:
    if not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"INTAKE_TIMEOUT_SECONDS must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError(f"INTAKE_TIMEOUT_SECONDS must be positive, got {raw!r}")
    return timeout


@dataclass(frozen=True)
class IntakeSettings:
    """Where submissions go and how long to wait for the endpoint."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    timeout_seconds: Optional[float] = None

    @classmethod
    def load(cls) -> "IntakeSettings":
        """Resolve settings from Streamlit secrets, the environment and the env file.

        - ``INTAKE_ENDPOINT_URL`` overrides the production hook.
        - ``INTAKE_TIMEOUT_SECONDS`` sets a request timeout; unset means the
          transport's own defaults apply.
        """

        _ensure_intake_env()
        endpoint = get_config_value("INTAKE_ENDPOINT_URL", DEFAULT_ENDPOINT_URL) or DEFAULT_ENDPOINT_URL
        timeout = _parse_timeout(get_config_value("INTAKE_TIMEOUT_SECONDS", ""))
        logger.debug("Intake endpoint resolved to %s (timeout=%s)", endpoint, timeout)
        return cls(endpoint_url=endpoint, timeout_seconds=timeout)
