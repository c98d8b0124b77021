"""
Public facade for the LinketySplit publication SDK.

The most useful pieces are re-exported here so integrators can
``from linketysplit import ...`` without navigating the package.
"""

from .api import create_article_purchase_url, create_publication_client
from .core import (
    ARTICLE_ACCESS_LINK_PARAM,
    ORIGIN,
    PUBLICATION_API_PATH,
    PURCHASE_LINK_PATH,
    ApiCallError,
    ArticleAccessData,
    ArticleData,
    ArticlePricing,
    ArticleResponse,
    ConfigError,
    PricingDiscountTier,
    PublicationClient,
    PublicationConfig,
    PublicationData,
    PublicationResponse,
    PurchaseLinkPayload,
    ReaderData,
    ValidationError,
    VerifyArticleAccessResponse,
    build_meta_tag_html,
    build_purchase_link_payload,
    build_purchase_url,
    load_env_file,
    load_publication_config,
    sign_payload,
    validate_permalink,
    validate_pricing,
)

__all__ = (
    "ARTICLE_ACCESS_LINK_PARAM",
    "ORIGIN",
    "PUBLICATION_API_PATH",
    "PURCHASE_LINK_PATH",
    "ApiCallError",
    "ArticleAccessData",
    "ArticleData",
    "ArticlePricing",
    "ArticleResponse",
    "ConfigError",
    "PricingDiscountTier",
    "PublicationClient",
    "PublicationConfig",
    "PublicationData",
    "PublicationResponse",
    "PurchaseLinkPayload",
    "ReaderData",
    "ValidationError",
    "VerifyArticleAccessResponse",
    "build_meta_tag_html",
    "build_purchase_link_payload",
    "build_purchase_url",
    "create_article_purchase_url",
    "create_publication_client",
    "load_env_file",
    "load_publication_config",
    "sign_payload",
    "validate_permalink",
    "validate_pricing",
)
