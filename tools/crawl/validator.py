"""Shape checks for caller-supplied crawl arguments."""

from collections.abc import Mapping
from typing import Any

from models.crawl import CrawlRequest
from models.errors import InvalidParamsError


def is_valid_crawl_request(args: Any) -> bool:
    """
    Check that ``args`` looks like ``{"urls": [str, ...]}``.

    Empty lists, duplicates and odd-looking URLs are accepted; the crawling
    service is the judge of URL syntax.
    """
    if not isinstance(args, Mapping):
        return False
    urls = args.get("urls")
    if not isinstance(urls, list):
        return False
    return all(isinstance(url, str) for url in urls)


def parse_crawl_request(args: Any) -> CrawlRequest:
    if not is_valid_crawl_request(args):
        raise InvalidParamsError("Invalid crawl request parameters")
    return CrawlRequest(urls=tuple(args["urls"]))
