"""
Rendering of the ``linketysplit:*`` meta tags an article page carries.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from .models import ArticlePricing
from .validators import ValidationError, validate_pricing

__all__ = ["build_meta_tag_html"]


def _escape_attribute(value: str) -> str:
    return value.replace('"', "&quot;")


def _format_published_time(value: Union[datetime, str]) -> str:
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValidationError("Published time is not valid.") from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    stamp = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def build_meta_tag_html(
    *,
    enabled: bool,
    article_pricing: Optional[Union[Mapping[str, Any], ArticlePricing]] = None,
    published_time: Optional[Union[datetime, str]] = None,
    article_title: Optional[str] = None,
    article_description: Optional[str] = None,
    article_image: Optional[str] = None,
) -> str:
    """
    Build the meta tags that describe an article to the purchase service.

    Only ``enabled`` is required. Pricing falls back to the publication's
    default when omitted. Title, description, image and published time may be
    left out when the page already carries the matching ``og:*`` or
    ``article:published_time`` tags. Pricing is validated before rendering.
    """
    metas: List[str] = [
        f'<meta property="linketysplit:enabled" content="{"true" if enabled else "false"}" />',
    ]
    if published_time:
        metas.append(
            f'<meta name="linketysplit:published_time" content="{_format_published_time(published_time)}" />'
        )
    if article_pricing is not None:
        pricing = validate_pricing(article_pricing)
        encoded = json.dumps(pricing.to_dict(), separators=(",", ":"))
        metas.append(
            f'<meta name="linketysplit:article_pricing" content="{_escape_attribute(encoded)}" />'
        )
    if article_title:
        metas.append(
            f'<meta name="linketysplit:title" content="{_escape_attribute(article_title)}" />'
        )
    if article_description:
        metas.append(
            f'<meta name="linketysplit:description" content="{_escape_attribute(article_description)}" />'
        )
    if article_image:
        metas.append(
            f'<meta name="linketysplit:image" content="{_escape_attribute(article_image)}" />'
        )
    return "\n".join(metas)
