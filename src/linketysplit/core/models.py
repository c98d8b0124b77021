"""
Value types for article pricing and the publication API responses.

Pricing types are built by :func:`linketysplit.core.validators.validate_pricing`.
The response types wrap the JSON documents returned by the publication API and
keep the parsed document on ``raw`` for anything not modelled here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple, Union

__all__ = [
    "ArticleAccessData",
    "ArticleData",
    "ArticlePricing",
    "ArticleResponse",
    "PricingDiscountTier",
    "PublicationData",
    "PublicationResponse",
    "ReaderData",
    "VerifyArticleAccessResponse",
]


@dataclass(frozen=True)
class PricingDiscountTier:
    """
    A bulk-purchase discount: buying ``minimum_quantity`` or more article
    accesses takes ``discount_percentage`` percent off the base price.
    """

    minimum_quantity: int
    discount_percentage: Union[int, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minimumQuantity": self.minimum_quantity,
            "discountPercentage": self.discount_percentage,
        }

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PricingDiscountTier":
        return cls(
            minimum_quantity=payload.get("minimumQuantity"),
            discount_percentage=payload.get("discountPercentage"),
        )


@dataclass(frozen=True)
class ArticlePricing:
    """
    Unit price in U.S. cents plus discount tiers sorted by ``minimum_quantity``.
    """

    price: int
    discounts: Tuple[PricingDiscountTier, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "price": self.price,
            "discounts": [tier.to_dict() for tier in self.discounts],
        }

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ArticlePricing":
        discounts = payload.get("discounts") or []
        return cls(
            price=payload.get("price"),
            discounts=tuple(PricingDiscountTier.from_response(d) for d in discounts),
        )


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _optional_pricing(value: Any) -> Optional[ArticlePricing]:
    if isinstance(value, Mapping):
        return ArticlePricing.from_response(value)
    return None


@dataclass(frozen=True)
class PublicationData:
    id: str
    name: str
    organization_name: str
    verified_domains: Tuple[str, ...]
    default_pricing: Optional[ArticlePricing]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PublicationData":
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            organization_name=payload.get("organizationName"),
            verified_domains=tuple(payload.get("verifiedDomains") or ()),
            default_pricing=_optional_pricing(payload.get("defaultPricing")),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class ArticleData:
    """
    What the service currently knows about an article.

    ``enabled``, ``pricing``, ``title``, ``description``, ``published_at`` and
    ``image`` are scraped from the article's meta tags.
    """

    id: str
    publication_id: str
    enabled: bool
    pricing: Optional[ArticlePricing]
    title: Optional[str]
    description: Optional[str]
    permalink: str
    published_at: Optional[datetime]
    image: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ArticleData":
        return cls(
            id=payload.get("id"),
            publication_id=payload.get("publicationId"),
            enabled=bool(payload.get("enabled")),
            pricing=_optional_pricing(payload.get("pricing")),
            title=payload.get("title"),
            description=payload.get("description"),
            permalink=payload.get("permalink"),
            published_at=_parse_timestamp(payload.get("publishedAt")),
            image=payload.get("image"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class ReaderData:
    id: str
    name: str
    profile_image_url: Optional[str]

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ReaderData":
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            profile_image_url=payload.get("profileImageUrl"),
        )


def _optional_reader(value: Any) -> Optional[ReaderData]:
    if isinstance(value, Mapping):
        return ReaderData.from_response(value)
    return None


@dataclass(frozen=True)
class ArticleAccessData:
    """
    Result of verifying an article access link.

    When ``grant_access`` is true the link came from the service, has not been
    used before, and the reader is entitled to the article; ``reader``,
    ``purchaser``, ``article_id`` and ``purchase_id`` are then populated.
    Otherwise ``error`` explains why access was refused.
    """

    article_access_id: str
    grant_access: bool
    reader: Optional[ReaderData] = None
    purchaser: Optional[ReaderData] = None
    article_id: Optional[str] = None
    purchase_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ArticleAccessData":
        return cls(
            article_access_id=payload.get("articleAccessId"),
            grant_access=payload.get("grantAccess") is True,
            reader=_optional_reader(payload.get("reader")),
            purchaser=_optional_reader(payload.get("purchaser")),
            article_id=payload.get("articleId"),
            purchase_id=payload.get("purchaseId"),
            error=payload.get("error"),
        )


@dataclass(frozen=True)
class PublicationResponse:
    publication: PublicationData
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PublicationResponse":
        return cls(
            publication=PublicationData.from_response(payload.get("publication") or {}),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class ArticleResponse:
    publication: PublicationData
    article: ArticleData
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ArticleResponse":
        return cls(
            publication=PublicationData.from_response(payload.get("publication") or {}),
            article=ArticleData.from_response(payload.get("article") or {}),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class VerifyArticleAccessResponse:
    publication: PublicationData
    article_access: ArticleAccessData
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "VerifyArticleAccessResponse":
        return cls(
            publication=PublicationData.from_response(payload.get("publication") or {}),
            article_access=ArticleAccessData.from_response(
                payload.get("articleAccess") or {}
            ),
            raw=dict(payload),
        )
