from typing import Any
from unittest.mock import MagicMock

import pytest

from linketysplit import PublicationConfig

API_KEY = "0VaaIDZe1ctf6Nicbc0ohzTQtf7vZfCSJKSLjdCAAJ3n8AefiNyoD"


def make_response(status_code: int = 200, data: Any = None, reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    if isinstance(data, Exception):
        response.json.side_effect = data
    else:
        response.json.return_value = data
    return response


@pytest.fixture
def api_key() -> str:
    return API_KEY


@pytest.fixture
def config() -> PublicationConfig:
    return PublicationConfig(api_key=API_KEY)


@pytest.fixture
def session() -> MagicMock:
    return MagicMock()


@pytest.fixture
def publication_json() -> dict:
    return {
        "id": "pub_1",
        "name": "The Daily Example",
        "organizationName": "Example Media",
        "verifiedDomains": ["example.com"],
        "defaultPricing": {
            "price": 49,
            "discounts": [{"minimumQuantity": 10, "discountPercentage": 5}],
        },
    }


@pytest.fixture
def article_json() -> dict:
    return {
        "id": "art_1",
        "publicationId": "pub_1",
        "enabled": True,
        "pricing": {"price": 100, "discounts": []},
        "title": "The story",
        "description": "What happened",
        "permalink": "https://example.com/article",
        "publishedAt": "2024-07-06T16:06:19.431Z",
        "image": None,
    }
