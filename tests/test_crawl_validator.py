import pytest

from models.crawl import CrawlRequest
from models.errors import InvalidParamsError
from tools.crawl.validator import is_valid_crawl_request, parse_crawl_request


@pytest.mark.unit
@pytest.mark.parametrize(
    "args",
    [
        None,
        "https://example.com",
        ["https://example.com"],
        42,
        {},
        {"url": ["https://example.com"]},
        {"urls": "https://example.com"},
        {"urls": None},
        {"urls": ("https://example.com",)},
        {"urls": ["https://example.com", 3]},
        {"urls": [None]},
        {"urls": [["https://example.com"]]},
    ],
)
def test_rejects_malformed_arguments(args):
    assert is_valid_crawl_request(args) is False
    with pytest.raises(InvalidParamsError) as exc_info:
        parse_crawl_request(args)
    assert exc_info.value.code == "invalid_params"
    assert exc_info.value.message == "Invalid crawl request parameters"


@pytest.mark.unit
def test_accepts_empty_duplicate_and_odd_urls():
    assert is_valid_crawl_request({"urls": []}) is True
    assert is_valid_crawl_request({"urls": ["a", "a"]}) is True
    assert is_valid_crawl_request({"urls": ["not a url", ""]}) is True


@pytest.mark.unit
def test_parse_returns_frozen_request_and_ignores_extra_keys():
    request = parse_crawl_request({"urls": ["https://a.test", "https://b.test"], "depth": 3})

    assert request == CrawlRequest(urls=("https://a.test", "https://b.test"))
    with pytest.raises(AttributeError):
        request.urls = ()
