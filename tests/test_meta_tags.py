from datetime import datetime, timedelta, timezone

import pytest

from linketysplit import ValidationError, build_meta_tag_html


def test_enabled_only():
    assert (
        build_meta_tag_html(enabled=True)
        == '<meta property="linketysplit:enabled" content="true" />'
    )


def test_disabled():
    assert 'content="false"' in build_meta_tag_html(enabled=False)


def test_all_tags_in_order():
    html = build_meta_tag_html(
        enabled=True,
        article_pricing={"price": 100},
        published_time=datetime(2024, 7, 6, 16, 6, 19, 431000, tzinfo=timezone.utc),
        article_title='The "best" story',
        article_description="What happened",
        article_image="https://example.com/image.png",
    )
    assert html.split("\n") == [
        '<meta property="linketysplit:enabled" content="true" />',
        '<meta name="linketysplit:published_time" content="2024-07-06T16:06:19.431Z" />',
        '<meta name="linketysplit:article_pricing" content="{&quot;price&quot;:100,&quot;discounts&quot;:[]}" />',
        '<meta name="linketysplit:title" content="The &quot;best&quot; story" />',
        '<meta name="linketysplit:description" content="What happened" />',
        '<meta name="linketysplit:image" content="https://example.com/image.png" />',
    ]


@pytest.mark.parametrize(
    "published_time",
    [
        "2024-07-06T16:06:19.431Z",
        "2024-07-06T18:06:19.431+02:00",
        datetime(2024, 7, 6, 16, 6, 19, 431000),
        datetime(2024, 7, 6, 11, 6, 19, 431000, tzinfo=timezone(timedelta(hours=-5))),
    ],
)
def test_published_time_is_utc(published_time):
    html = build_meta_tag_html(enabled=True, published_time=published_time)
    assert 'content="2024-07-06T16:06:19.431Z"' in html


def test_invalid_published_time():
    with pytest.raises(ValidationError, match="Published time"):
        build_meta_tag_html(enabled=True, published_time="last tuesday")


def test_pricing_is_validated_and_sorted():
    html = build_meta_tag_html(
        enabled=True,
        article_pricing={
            "price": 49,
            "discounts": [
                {"minimumQuantity": 20, "discountPercentage": 15},
                {"minimumQuantity": 10, "discountPercentage": 5},
            ],
        },
    )
    assert (
        "{&quot;price&quot;:49,&quot;discounts&quot;:["
        "{&quot;minimumQuantity&quot;:10,&quot;discountPercentage&quot;:5},"
        "{&quot;minimumQuantity&quot;:20,&quot;discountPercentage&quot;:15}]}"
    ) in html
    with pytest.raises(ValidationError):
        build_meta_tag_html(enabled=True, article_pricing={"price": 0})


def test_empty_strings_are_skipped():
    html = build_meta_tag_html(enabled=True, article_title="", article_image=None)
    assert html.count("<meta") == 1
