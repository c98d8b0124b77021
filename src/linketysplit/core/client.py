"""
HTTP client helpers for the publication API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union
from urllib.parse import ParseResult, SplitResult, parse_qs, quote, urlsplit

import requests

from .config import ARTICLE_ACCESS_LINK_PARAM, PublicationConfig
from .meta_tags import build_meta_tag_html
from .models import (
    ArticlePricing,
    ArticleResponse,
    PublicationResponse,
    VerifyArticleAccessResponse,
)
from .payloads import Signer, build_purchase_link_payload, build_purchase_url, sign_payload
from .validators import validate_permalink

__all__ = [
    "ApiCallError",
    "PublicationClient",
    "get_article",
    "get_publication",
    "request_json",
    "upsert_article",
    "verify_article_access",
]

# Matches the characters encodeURIComponent leaves alone.
_SLUG_SAFE_CHARS = "!*'()"


class ApiCallError(RuntimeError):
    """
    Raised when the publication API answers with a non-2xx status.

    For 4xx responses ``message`` carries the API's own explanation.
    """

    def __init__(self, message: str, status_code: int, status_message: str) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status_message = status_message


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "Unknown error."
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return "Unknown error."


def request_json(
    session: requests.Session,
    config: PublicationConfig,
    slugs: Sequence[str],
    post_data: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Call the publication API and return the decoded JSON body.

    ``slugs`` are appended to the API path and percent-encoded here, so pass
    them raw. A ``post_data`` mapping turns the request into a JSON POST.
    """
    parts = [config.publication_api_url]
    parts.extend(quote(slug, safe=_SLUG_SAFE_CHARS) for slug in slugs)
    url = "/".join(parts)
    headers = {
        "Authorization": f"Bearer {config.api_key}",
        "Accept": "application/json",
    }

    if post_data is not None:
        logging.info("POST %s", url)
        response = session.post(
            url, json=dict(post_data), headers=headers, timeout=config.timeout_seconds
        )
    else:
        logging.info("GET %s", url)
        response = session.get(url, headers=headers, timeout=config.timeout_seconds)

    if response.status_code < 200 or response.status_code >= 300:
        message = _error_message(response)
        logging.error(
            "Publication API responded with %s: %s", response.status_code, message
        )
        raise ApiCallError(message, response.status_code, response.reason)
    try:
        return response.json()
    except ValueError as exc:
        raise ApiCallError(
            f"Failed to parse JSON from publication API at {url}",
            response.status_code,
            response.reason,
        ) from exc


def get_publication(
    session: requests.Session,
    config: PublicationConfig,
) -> PublicationResponse:
    payload = request_json(session, config, [])
    return PublicationResponse.from_response(payload)


def get_article(
    session: requests.Session,
    config: PublicationConfig,
    permalink: str,
) -> ArticleResponse:
    canonical_permalink = validate_permalink(permalink)
    payload = request_json(session, config, ["article", canonical_permalink])
    return ArticleResponse.from_response(payload)


def upsert_article(
    session: requests.Session,
    config: PublicationConfig,
    permalink: str,
) -> ArticleResponse:
    canonical_permalink = validate_permalink(permalink)
    payload = request_json(
        session, config, ["article"], {"permalink": canonical_permalink}
    )
    return ArticleResponse.from_response(payload)


def verify_article_access(
    session: requests.Session,
    config: PublicationConfig,
    access_id: str,
) -> VerifyArticleAccessResponse:
    """
    Check an article access ID with the API.

    Inspect ``article_access.grant_access`` on the result: only when it is
    true should the reader be shown the full article.
    """
    payload = request_json(
        session, config, ["verify-article-access"], {"articleAccessId": access_id}
    )
    return VerifyArticleAccessResponse.from_response(payload)


def _access_id_from_url(request_url: Union[str, SplitResult, ParseResult]) -> Optional[str]:
    if isinstance(request_url, str):
        request_url = urlsplit(request_url)
    query = parse_qs(request_url.query, keep_blank_values=True)
    values = query.get(ARTICLE_ACCESS_LINK_PARAM)
    if not values:
        return None
    return values[0] or None


class PublicationClient:
    """
    Entry point for a publication's backend.

    Creates purchase links, renders article meta tags, recognizes article
    access links and exposes the publication API endpoints.
    """

    def __init__(
        self,
        config: PublicationConfig,
        *,
        session: Optional[requests.Session] = None,
        signer: Signer = sign_payload,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.signer = signer

    def create_article_purchase_url(
        self,
        permalink: str,
        custom_pricing: Optional[Union[Mapping[str, Any], ArticlePricing]] = None,
        show_sharing_context: Optional[bool] = None,
    ) -> str:
        """
        Build a signed link to the purchase page for ``permalink``.

        ``custom_pricing`` overrides the article's advertised pricing for
        this reader only. ``show_sharing_context=True`` opens the "share this
        article" screen instead, e.g. for readers who already have access.
        """
        payload = build_purchase_link_payload(
            permalink, custom_pricing, show_sharing_context
        )
        return build_purchase_url(self.config, payload, signer=self.signer)

    def get_meta_tag_html(self, **options: Any) -> str:
        return build_meta_tag_html(**options)

    def handle_article_request_url(
        self, request_url: Union[str, SplitResult, ParseResult]
    ) -> Optional[VerifyArticleAccessResponse]:
        """
        Verify the access link carried by an article request URL, if any.

        Returns ``None`` when the URL has no (or an empty) access parameter.
        """
        access_id = _access_id_from_url(request_url)
        if access_id is None:
            return None
        return self.verify_article_access(access_id)

    def get_publication(self) -> PublicationResponse:
        return get_publication(self.session, self.config)

    def get_article(self, permalink: str) -> ArticleResponse:
        return get_article(self.session, self.config, permalink)

    def upsert_article(self, permalink: str) -> ArticleResponse:
        return upsert_article(self.session, self.config, permalink)

    def verify_article_access(self, access_id: str) -> VerifyArticleAccessResponse:
        return verify_article_access(self.session, self.config, access_id)

    def make_api_request(
        self,
        slugs: Sequence[str],
        post_data: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        return request_json(self.session, self.config, slugs, post_data)
