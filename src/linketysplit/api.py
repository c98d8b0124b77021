"""
Public, high-level helpers for publications integrating with LinketySplit.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import requests

from .core.client import PublicationClient
from .core.config import PublicationConfig, load_publication_config
from .core.models import ArticlePricing
from .core.payloads import (
    Signer,
    build_purchase_link_payload,
    build_purchase_url,
    sign_payload,
)

__all__ = [
    "create_article_purchase_url",
    "create_publication_client",
]


def _resolve_config(
    config: Optional[PublicationConfig],
    *,
    env_file: Optional[str],
    overrides: Optional[Mapping[str, str]],
    base: Optional[Mapping[str, str]],
    api_key: Optional[str],
    origin: Optional[str],
    timeout_seconds: Optional[float | str],
) -> PublicationConfig:
    if config is None:
        return load_publication_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            api_key=api_key,
            origin=origin,
            timeout_seconds=timeout_seconds,
        )

    extras = (overrides, base, api_key, origin, timeout_seconds)
    if any(item is not None and item != {} for item in extras):
        raise ValueError(
            "Provide either a pre-built PublicationConfig or individual parameters, not both."
        )
    return config


def create_publication_client(
    *,
    config: Optional[PublicationConfig] = None,
    session: Optional[requests.Session] = None,
    signer: Signer = sign_payload,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    api_key: Optional[str] = None,
    origin: Optional[str] = None,
    timeout_seconds: Optional[float | str] = None,
) -> PublicationClient:
    """
    Construct a :class:`PublicationClient`.

    Callers can either supply a ready-made :class:`PublicationConfig` or let
    the helper assemble one from environment data and keyword arguments.
    """
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        api_key=api_key,
        origin=origin,
        timeout_seconds=timeout_seconds,
    )
    return PublicationClient(cfg, session=session, signer=signer)


def create_article_purchase_url(
    permalink: str,
    custom_pricing: Optional[Union[Mapping[str, Any], ArticlePricing]] = None,
    show_sharing_context: Optional[bool] = None,
    *,
    config: Optional[PublicationConfig] = None,
    signer: Signer = sign_payload,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    api_key: Optional[str] = None,
    origin: Optional[str] = None,
) -> str:
    """
    One-shot helper that signs a purchase link without keeping a client.
    """
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        api_key=api_key,
        origin=origin,
        timeout_seconds=None,
    )
    payload = build_purchase_link_payload(permalink, custom_pricing, show_sharing_context)
    return build_purchase_url(cfg, payload, signer=signer)
