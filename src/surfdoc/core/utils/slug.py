"""Anchor slug generation for table-of-contents entries"""

import re


def slugify(text: str) -> str:
    """Convert heading text to a lowercase, hyphen-separated anchor id."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def unique_slug(text: str, seen: dict[str, int], fallback: str = "section") -> str:
    """Slugify text, suffixing -1, -2, ... on repeats tracked in seen."""
    base = slugify(text) or fallback
    count = seen.get(base, 0)
    seen[base] = count + 1
    return base if count == 0 else f"{base}-{count}"
