"""Relevance ranking for catalog search."""

import re
from collections.abc import Iterable

from codepath.domain.catalog.entities.content import Content

TITLE_WEIGHT = 3
TAG_WEIGHT = 2
DESCRIPTION_WEIGHT = 1

_TOKEN_PATTERN = re.compile(r"[\w+#.-]+", re.UNICODE)


def tokenize(text: str) -> list[str]:
    """Lower-cased search terms; keeps tokens such as c++, c#, node.js."""
    return [token.strip(".-") for token in _TOKEN_PATTERN.findall(text.lower()) if token.strip(".-")]


def score(content: Content, terms: Iterable[str]) -> int:
    """Weighted count of term hits across title, tags and description."""
    title_tokens = tokenize(content.title)
    description_tokens = tokenize(content.description)
    tag_tokens = [token for tag in content.tags for token in tokenize(tag)]

    total = 0
    for term in terms:
        total += TITLE_WEIGHT * title_tokens.count(term)
        total += TAG_WEIGHT * tag_tokens.count(term)
        total += DESCRIPTION_WEIGHT * description_tokens.count(term)
    return total


def rank(contents: list[Content], query: str | None) -> list[Content]:
    """
    Order contents by relevance to the query.

    Without a query, contents are returned newest first. With a query,
    non-matching contents are dropped and ties fall back to newest first.
    """
    newest_first = sorted(
        contents, key=lambda c: (c.created_at is not None, c.created_at, c.id.value), reverse=True
    )
    terms = list(dict.fromkeys(tokenize(query or "")))
    if not terms:
        return newest_first

    scored = [(score(content, terms), content) for content in newest_first]
    # sorted() is stable so equal scores keep the newest-first order
    return [content for points, content in sorted(scored, key=lambda pair: -pair[0]) if points > 0]
