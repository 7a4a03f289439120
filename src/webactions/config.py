"""Client configuration.

WebActionsConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups.
"""

import math
import os
from dataclasses import dataclass

from webactions.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class WebActionsConfig:
    """Where and how to fetch. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = WebActionsConfig(base_url="http://localhost:8080", timeout=5.0)
    """

    # Backend
    base_url: str = ""
    metadata_path: str = "/api/webactionmetadata"
    raw_url: str = "https://jsonplaceholder.typicode.com/posts/"

    # Transport
    timeout: float = 30.0
    headers: tuple[tuple[str, str], ...] = ()

    @property
    def metadata_url(self) -> str:
        return self.base_url.rstrip("/") + self.metadata_path

    @classmethod
    def from_env(cls) -> "WebActionsConfig":
        """Build a config from ``WEBACTIONS_*`` environment variables.

        Unset variables keep their defaults.
        """
        defaults = cls()
        raw_timeout = os.environ.get("WEBACTIONS_TIMEOUT")
        timeout = defaults.timeout
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                msg = f"WEBACTIONS_TIMEOUT must be a number, got {raw_timeout!r}"
                raise ConfigurationError(msg) from None
            if not math.isfinite(timeout) or timeout <= 0:
                msg = f"WEBACTIONS_TIMEOUT must be a positive finite number, got {timeout}"
                raise ConfigurationError(msg)

        return cls(
            base_url=os.environ.get("WEBACTIONS_BASE_URL", defaults.base_url),
            raw_url=os.environ.get("WEBACTIONS_RAW_URL", defaults.raw_url),
            timeout=timeout,
        )
