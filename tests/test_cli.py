import json

import jwt
import pytest

from linketysplit.cli import run_cli

from conftest import make_response


@pytest.fixture
def base_args(tmp_path, api_key, monkeypatch):
    for key in ("LINKETYSPLIT_API_KEY", "LINKETYSPLIT_ORIGIN", "LINKETYSPLIT_TIMEOUT_SECONDS"):
        monkeypatch.delenv(key, raising=False)
    return [
        "--env-file",
        str(tmp_path / "missing.env"),
        "--set",
        f"LINKETYSPLIT_API_KEY={api_key}",
    ]


def test_purchase_url(base_args, api_key, capsys):
    code = run_cli(
        base_args
        + ["purchase-url", "https://example.com/a", "--price", "49", "--discount", "20:15", "--discount", "10:5", "--share"]
    )

    assert code == 0
    url = capsys.readouterr().out.strip()
    claims = jwt.decode(url.split("/")[-1], api_key, algorithms=["HS256"])
    assert claims["customPricing"] == {
        "price": 49,
        "discounts": [
            {"minimumQuantity": 10, "discountPercentage": 5},
            {"minimumQuantity": 20, "discountPercentage": 15},
        ],
    }
    assert claims["showSharingContext"] is True


def test_purchase_url_rejects_invalid_permalink(base_args, capsys):
    assert run_cli(base_args + ["purchase-url", "http://example.com/a"]) == 1
    assert capsys.readouterr().out == ""


def test_discount_without_price(base_args):
    assert run_cli(base_args + ["purchase-url", "https://example.com/a", "--discount", "10:5"]) == 1


def test_malformed_discount(base_args):
    with pytest.raises(SystemExit):
        run_cli(base_args + ["purchase-url", "https://example.com/a", "--discount", "ten"])


def test_missing_api_key(tmp_path, monkeypatch):
    monkeypatch.delenv("LINKETYSPLIT_API_KEY", raising=False)
    code = run_cli(["--env-file", str(tmp_path / "missing.env"), "publication"])
    assert code == 1


def test_meta_tags(base_args, capsys):
    assert run_cli(base_args + ["meta-tags", "--price", "100", "--title", "Story"]) == 0
    out = capsys.readouterr().out
    assert '<meta property="linketysplit:enabled" content="true" />' in out
    assert '<meta name="linketysplit:title" content="Story" />' in out


def test_publication(base_args, session, capsys):
    session.get.return_value = make_response(data={"publication": {"id": "pub_1"}})

    assert run_cli(base_args + ["publication"], session=session) == 0
    assert json.loads(capsys.readouterr().out) == {"publication": {"id": "pub_1"}}


def test_verify_refused(base_args, session):
    session.post.return_value = make_response(
        data={
            "publication": {"id": "pub_1"},
            "articleAccess": {"articleAccessId": "a", "grantAccess": False, "error": "used"},
        }
    )
    assert run_cli(base_args + ["verify", "a"], session=session) == 1


def test_api_error(base_args, session):
    session.post.return_value = make_response(400, data={"message": "Bad"}, reason="Bad Request")
    assert run_cli(base_args + ["upsert", "https://example.com/a"], session=session) == 1
