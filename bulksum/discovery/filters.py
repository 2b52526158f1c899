"""Keyword filtering of discovered items."""

import re
from typing import List, Pattern, Sequence

from ..models import Item

# Stacked quantifiers such as "c++" are errors before Python 3.11 and
# possessive quantifiers after it; both are treated as literal text.
STACKED_QUANTIFIER = re.compile(r"(?<!\\)[*+?}]\+")


def compile_keyword(keyword: str) -> Pattern:
    """Case-insensitive pattern; keywords that are not valid regexes match literally."""
    if not STACKED_QUANTIFIER.search(keyword):
        try:
            return re.compile(keyword, re.IGNORECASE)
        except re.error:
            pass
    return re.compile(re.escape(keyword), re.IGNORECASE)


def compile_keywords(keywords: Sequence[str]) -> List[Pattern]:
    """Compile every non-empty keyword."""
    return [compile_keyword(keyword) for keyword in keywords if keyword]


def matches_keywords(item: Item, patterns: Sequence[Pattern]) -> bool:
    """True when any pattern occurs in the title or description."""
    text_fields = (item.title or "", item.description or "")
    return any(p.search(text) for p in patterns for text in text_fields)


def filter_items(items: List[Item], keywords: Sequence[str]) -> List[Item]:
    """Keep items matching at least one keyword; no keywords keeps everything."""
    patterns = compile_keywords(keywords)
    if not patterns:
        return list(items)
    return [item for item in items if matches_keywords(item, patterns)]
