"""
URL slug normalization
"""

import re

_STRIP_RE = re.compile(r"[^\w\s-]")
_SEPARATOR_RE = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """
    Turn arbitrary text into a URL slug

    Lower-case, only word characters and single hyphens, no leading or
    trailing hyphen. slugify(slugify(x)) == slugify(x).
    Collisions with existing slugs are the caller's problem.
    """
    if not text:
        return ""
    slug = text.lower().strip()
    slug = _STRIP_RE.sub("", slug)
    slug = _SEPARATOR_RE.sub("-", slug)
    return slug.strip("-")
