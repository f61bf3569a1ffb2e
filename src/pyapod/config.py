"""Client configuration for pyapod."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyapod._constants import BASE_URL, USER_AGENT
from pyapod.exceptions import ApodConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class ApodConfig:
    """Client configuration.

    Parameters
    ----------
    api_key : str
        api.nasa.gov access key. Sent as the ``api_key`` query parameter
        on every request. Must be supplied by the caller.
    base_url : str
        APOD endpoint URL.
    user_agent : str
        ``User-Agent`` header sent with each request.
    discard_stale : bool
        When ``True`` the store drops completions of loads that were
        superseded by a newer load, so the last issued load wins. When
        ``False`` completions overwrite state in completion order.
    """

    api_key: str
    base_url: str = BASE_URL
    user_agent: str = USER_AGENT
    discard_stale: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise ApodConfigError("api_key must be a non-empty string")
        if not self.base_url:
            raise ApodConfigError("base_url must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> ApodConfig:
        """Create configuration from environment variables.

        Reads ``NASA_API_KEY`` (falling back to ``APOD_API_KEY``) and the
        optional ``APOD_BASE_URL``, ``APOD_USER_AGENT`` and
        ``APOD_DISCARD_STALE`` variables. Explicit keyword arguments
        override environment values.

        Raises
        ------
        ApodConfigError
            If no API key is available from either source.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        api_key = env.get("NASA_API_KEY") or env.get("APOD_API_KEY")
        if api_key is not None:
            config_kwargs["api_key"] = api_key

        _ENV_CONFIG_MAP = {
            "APOD_BASE_URL": "base_url",
            "APOD_USER_AGENT": "user_agent",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "discard_stale" not in overrides:
            config_kwargs["discard_stale"] = _env_bool(env.get("APOD_DISCARD_STALE"), True)

        config_kwargs.update(overrides)

        if "api_key" not in config_kwargs:
            raise ApodConfigError("NASA_API_KEY is not set")

        return cls(**config_kwargs)
