"""
Helpers for constructing and signing the article purchase-link payload.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Union

import jwt

from .config import PublicationConfig
from .models import ArticlePricing
from .validators import validate_permalink, validate_pricing

__all__ = [
    "PurchaseLinkPayload",
    "Signer",
    "build_purchase_link_payload",
    "build_purchase_url",
    "sign_payload",
]

SIGNING_ALGORITHM = "HS256"

Signer = Callable[[Dict[str, Any], str], str]


@dataclass(frozen=True)
class PurchaseLinkPayload:
    """
    The claims carried inside a purchase-link token.

    Optional claims are emitted only when set: ``custom_pricing`` of ``None``
    and ``show_sharing_context`` of ``False`` leave their keys out of
    :meth:`to_dict` entirely.
    """

    permalink: str
    custom_pricing: Optional[ArticlePricing] = None
    show_sharing_context: bool = False

    def to_dict(self) -> Dict[str, Any]:
        claims: Dict[str, Any] = {"permalink": self.permalink}
        if self.custom_pricing is not None:
            claims["customPricing"] = self.custom_pricing.to_dict()
        if self.show_sharing_context:
            claims["showSharingContext"] = True
        return claims


def build_purchase_link_payload(
    permalink: str,
    custom_pricing: Optional[Union[Mapping[str, Any], ArticlePricing]] = None,
    show_sharing_context: Optional[bool] = None,
) -> PurchaseLinkPayload:
    """
    Validate the inputs of a purchase link and assemble its payload.

    Validation errors from the permalink or pricing rules propagate as-is.
    Sharing context is only switched on by an explicit ``True``.
    """
    canonical_permalink = validate_permalink(permalink)
    pricing = validate_pricing(custom_pricing) if custom_pricing is not None else None
    return PurchaseLinkPayload(
        permalink=canonical_permalink,
        custom_pricing=pricing,
        show_sharing_context=show_sharing_context is True,
    )


def sign_payload(
    payload: Dict[str, Any],
    secret: str,
    *,
    now: Optional[int] = None,
) -> str:
    """
    Sign ``payload`` as a compact HS256 JWT with an ``iat`` claim.
    """
    issued_at = int(time.time()) if now is None else now
    claims = dict(payload)
    claims["iat"] = issued_at
    return jwt.encode(
        claims,
        secret.encode("utf-8"),
        algorithm=SIGNING_ALGORITHM,
    )


def build_purchase_url(
    config: PublicationConfig,
    payload: PurchaseLinkPayload,
    *,
    signer: Signer = sign_payload,
) -> str:
    """
    Sign ``payload`` with the publication API key and append the token to the
    purchase-link base URL.
    """
    token = signer(payload.to_dict(), config.api_key)
    logging.info("Created purchase link for %s", payload.permalink)
    return "/".join([config.purchase_link_url, token])
