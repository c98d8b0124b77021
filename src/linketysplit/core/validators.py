"""
Validation rules for article permalinks and article pricing.

Both validators are pure: they never mutate their input and always return a
freshly normalized value, raising :class:`ValidationError` on the first rule
that fails.
"""

from __future__ import annotations

import ipaddress
import math
from typing import Any, List, Mapping, Union
from urllib.parse import ParseResult, SplitResult, quote, urlsplit, urlunsplit

from .models import ArticlePricing, PricingDiscountTier

__all__ = [
    "ValidationError",
    "validate_permalink",
    "validate_pricing",
]

_SECURE_SCHEME = "https"
_DEFAULT_SECURE_PORT = 443
# Characters left untouched when re-encoding a permalink path.
_PATH_SAFE_CHARS = "/%:@!$&'()*+,;=-._~"
_FORBIDDEN_HOST_CHARS = frozenset('<>\\^|%"`{}')
_SINGLE_DOT_SEGMENTS = frozenset([".", "%2e"])
_DOUBLE_DOT_SEGMENTS = frozenset(["..", ".%2e", "%2e.", "%2e%2e"])


class ValidationError(ValueError):
    """Raised when a permalink or pricing structure breaks a validation rule."""


def _canonical_host(hostname: str) -> str:
    host = hostname
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError as exc:
            raise ValidationError("Permalink is not valid.") from exc
    if ":" in host:
        try:
            ipaddress.IPv6Address(host)
        except ValueError as exc:
            raise ValidationError("Permalink is not valid.") from exc
        return f"[{host}]"
    for char in host:
        if (
            char.isspace()
            or ord(char) < 0x20
            or ord(char) == 0x7F
            or char in _FORBIDDEN_HOST_CHARS
        ):
            raise ValidationError("Permalink is not valid.")
    return host


def _remove_dot_segments(path: str) -> str:
    segments = path.split("/")[1:]
    output: List[str] = []
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        lowered = segment.lower()
        if lowered in _DOUBLE_DOT_SEGMENTS:
            if output:
                output.pop()
            if is_last:
                output.append("")
        elif lowered in _SINGLE_DOT_SEGMENTS:
            if is_last:
                output.append("")
        else:
            output.append(segment)
    return "/" + "/".join(output)


def validate_permalink(permalink: Union[str, SplitResult, ParseResult]) -> str:
    """
    Validate an article permalink and return its canonical form.

    Permalinks must be secure (``https://``) canonical URLs: no query string,
    no fragment, no explicit port and no user/password. The returned string is
    the re-serialized URL, so host casing, default-port elision, path
    percent-encoding and ``.``/``..`` segments are normalized. Running the
    result through this function again yields the same string.
    """
    if isinstance(permalink, (SplitResult, ParseResult)):
        permalink = permalink.geturl()
    if not isinstance(permalink, str):
        raise ValidationError("Permalink is not valid.")

    try:
        # Backslashes separate path segments in https URLs, as browsers parse them.
        parts = urlsplit(permalink.strip().replace("\\", "/"))
        port = parts.port
    except ValueError as exc:
        raise ValidationError("Permalink is not valid.") from exc

    if not parts.scheme or not parts.hostname:
        raise ValidationError("Permalink is not valid.")
    if parts.scheme.lower() != _SECURE_SCHEME:
        raise ValidationError('Permalink must use "https://".')
    if parts.query:
        raise ValidationError("Permalink must not contain any query parameters.")
    if port is not None and port != _DEFAULT_SECURE_PORT:
        raise ValidationError("Permalink must not contain a port.")
    if parts.fragment:
        raise ValidationError("Permalink must not contain a hash fragment.")
    if parts.username or parts.password:
        raise ValidationError("Permalink must not contain a user/password.")

    host = _canonical_host(parts.hostname)
    path = quote(_remove_dot_segments(parts.path or "/"), safe=_PATH_SAFE_CHARS)
    return urlunsplit((_SECURE_SCHEME, host, path, "", ""))


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    return False


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def _validate_tier(raw: Any) -> PricingDiscountTier:
    if not isinstance(raw, Mapping):
        raise ValidationError("Each discount must be an object.")

    minimum_quantity = raw.get("minimumQuantity")
    if not _is_integer(minimum_quantity) or minimum_quantity < 2:
        raise ValidationError(
            "Minimum quantity must be an integer greater than or equal to 2."
        )

    discount_percentage = raw.get("discountPercentage")
    if (
        not _is_finite_number(discount_percentage)
        or discount_percentage <= 0
        or discount_percentage >= 100
    ):
        raise ValidationError(
            "Discount percentage must be a number greater than 0 and less than 100."
        )

    return PricingDiscountTier(
        minimum_quantity=int(minimum_quantity),
        discount_percentage=discount_percentage,
    )


def validate_pricing(pricing: Union[Mapping[str, Any], ArticlePricing]) -> ArticlePricing:
    """
    Validate article pricing and return it with discounts sorted by quantity.

    ``pricing`` uses the wire shape ``{"price": int, "discounts": [...]}``
    where each discount carries ``minimumQuantity`` and ``discountPercentage``.
    A missing ``discounts`` entry becomes an empty tuple in the result.

    Rules are checked in a fixed order: price, then each tier's fields, then
    quantity uniqueness, then strictly rising percentages after sorting.
    """
    if isinstance(pricing, ArticlePricing):
        pricing = pricing.to_dict()
    if not isinstance(pricing, Mapping):
        raise ValidationError("Pricing must be an object.")

    price = pricing.get("price")
    if not _is_integer(price) or price <= 0:
        raise ValidationError("Price must be an integer greater than 0.")

    raw_discounts = pricing.get("discounts")
    if not isinstance(raw_discounts, (list, tuple)):
        raw_discounts = []

    tiers: List[PricingDiscountTier] = [_validate_tier(raw) for raw in raw_discounts]

    quantities = [tier.minimum_quantity for tier in tiers]
    if len(set(quantities)) != len(quantities):
        raise ValidationError("Discount quantities must be unique.")

    tiers.sort(key=lambda tier: tier.minimum_quantity)
    previous_percentage: Union[int, float] = 0
    for tier in tiers:
        if tier.discount_percentage <= previous_percentage:
            raise ValidationError(
                "Each tier discount percentage must be greater than the previous tier's discount."
            )
        previous_percentage = tier.discount_percentage

    return ArticlePricing(price=int(price), discounts=tuple(tiers))
