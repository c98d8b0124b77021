"""
Configuration objects and constants for the publication SDK.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

from .environment import build_environment

__all__ = [
    "ARTICLE_ACCESS_LINK_PARAM",
    "ConfigError",
    "ORIGIN",
    "PUBLICATION_API_PATH",
    "PURCHASE_LINK_PATH",
    "PublicationConfig",
    "load_publication_config",
]

ORIGIN = "https://linketysplit.com"
PUBLICATION_API_PATH = "api/v1/publication"
PURCHASE_LINK_PATH = "purchase-link"
ARTICLE_ACCESS_LINK_PARAM = "linketysplit_access"

DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "api_key": "LINKETYSPLIT_API_KEY",
    "origin": "LINKETYSPLIT_ORIGIN",
    "timeout_seconds": "LINKETYSPLIT_TIMEOUT_SECONDS",
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:  # pragma: no cover - defensive, should not trigger
            raise TypeError(f"Unknown publication parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _normalize_api_key(raw_key: Optional[str]) -> str:
    key = (raw_key or "").strip()
    if not key:
        raise ConfigError("LINKETYSPLIT_API_KEY must be provided")
    return key


def _normalize_origin(raw_origin: str) -> str:
    origin = raw_origin.strip().rstrip("/")
    parts = urlsplit(origin)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(
            f"LINKETYSPLIT_ORIGIN must be an http(s) URL, got '{raw_origin}'"
        )
    return origin


def _parse_timeout(raw_timeout: str) -> float:
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(
            f"LINKETYSPLIT_TIMEOUT_SECONDS must be a number, got '{raw_timeout}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("LINKETYSPLIT_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class PublicationConfig:
    """
    Settings shared by every call the SDK makes on behalf of a publication.

    ``api_key`` authenticates API requests and is also the secret purchase
    links are signed with.
    """

    api_key: str
    origin: str = ORIGIN
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __repr__(self) -> str:
        return (
            f"PublicationConfig(api_key='***', origin={self.origin!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )

    @property
    def publication_api_url(self) -> str:
        return f"{self.origin}/{PUBLICATION_API_PATH}"

    @property
    def purchase_link_url(self) -> str:
        return f"{self.origin}/{PURCHASE_LINK_PATH}"

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "PublicationConfig":
        return cls(
            api_key=_normalize_api_key(values.get("LINKETYSPLIT_API_KEY")),
            origin=_normalize_origin(values.get("LINKETYSPLIT_ORIGIN", ORIGIN)),
            timeout_seconds=_parse_timeout(
                values.get("LINKETYSPLIT_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
            ),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        api_key: Optional[str] = None,
        origin: Optional[str] = None,
        timeout_seconds: Optional[float | str] = None,
    ) -> "PublicationConfig":
        parameter_overrides = _collect_parameter_overrides(
            {
                "api_key": api_key,
                "origin": origin,
                "timeout_seconds": timeout_seconds,
            }
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_publication_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    api_key: Optional[str] = None,
    origin: Optional[str] = None,
    timeout_seconds: Optional[float | str] = None,
) -> PublicationConfig:
    """
    Convenience wrapper that mirrors :meth:`PublicationConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, explicit
    ``overrides`` or keyword arguments; keyword arguments win.
    """
    return PublicationConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        api_key=api_key,
        origin=origin,
        timeout_seconds=timeout_seconds,
    )
