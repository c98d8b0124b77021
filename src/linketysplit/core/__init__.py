"""
Core primitives: validation, purchase-link payloads and the publication API.
"""

from .client import (
    ApiCallError,
    PublicationClient,
    get_article,
    get_publication,
    request_json,
    upsert_article,
    verify_article_access,
)
from .config import (
    ARTICLE_ACCESS_LINK_PARAM,
    ORIGIN,
    PUBLICATION_API_PATH,
    PURCHASE_LINK_PATH,
    ConfigError,
    PublicationConfig,
    load_publication_config,
)
from .environment import PublicationEnvironment, build_environment, load_env_file
from .meta_tags import build_meta_tag_html
from .models import (
    ArticleAccessData,
    ArticleData,
    ArticlePricing,
    ArticleResponse,
    PricingDiscountTier,
    PublicationData,
    PublicationResponse,
    ReaderData,
    VerifyArticleAccessResponse,
)
from .payloads import (
    PurchaseLinkPayload,
    build_purchase_link_payload,
    build_purchase_url,
    sign_payload,
)
from .validators import ValidationError, validate_permalink, validate_pricing

__all__ = [
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
    "PublicationEnvironment",
    "PublicationResponse",
    "PurchaseLinkPayload",
    "ReaderData",
    "ValidationError",
    "VerifyArticleAccessResponse",
    "build_environment",
    "build_meta_tag_html",
    "build_purchase_link_payload",
    "build_purchase_url",
    "get_article",
    "get_publication",
    "load_env_file",
    "load_publication_config",
    "request_json",
    "sign_payload",
    "upsert_article",
    "validate_permalink",
    "validate_pricing",
    "verify_article_access",
]
