"""Turn crawl result items into display text."""

from collections.abc import Callable, Mapping
from typing import Any

SECTION_SEPARATOR = "\n\n---\n\n"


def _missing_content(item: Any) -> str:
    url = item.get("url") if isinstance(item, Mapping) else None
    return f"Error: No markdown content available for URL {url or 'unknown'}"


def _deferred_markdown(item: Mapping[str, Any]) -> Any:
    return item.get("markdown")


def _immediate_markdown(item: Mapping[str, Any]) -> Any:
    markdown_v2 = item.get("markdown_v2")
    if not isinstance(markdown_v2, Mapping):
        return None
    return markdown_v2.get("markdown_with_citations")


def _normalize(results: list[Any], extract: Callable[[Mapping[str, Any]], Any]) -> list[str]:
    sections: list[str] = []
    for item in results:
        text = extract(item) if isinstance(item, Mapping) else None
        # One section per item, in upstream order; a missing text field only affects its own item
        sections.append(text if isinstance(text, str) and text else _missing_content(item))
    return sections


def normalize_deferred_results(results: list[Any]) -> list[str]:
    """Extract ``markdown`` from each item of a completed deferred task."""
    return _normalize(results, _deferred_markdown)


def normalize_immediate_results(results: list[Any]) -> list[str]:
    """Extract ``markdown_v2.markdown_with_citations`` from each inline result item."""
    return _normalize(results, _immediate_markdown)


def join_sections(sections: list[str]) -> str:
    return SECTION_SEPARATOR.join(sections)
