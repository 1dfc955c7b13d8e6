"""parsers/html_scan.py — Regex-driven element extraction with same-name tag balancing.

No DOM is built. An element is located by a regex for its opening tag, and its
closing tag is found by walking the stream of ``<tag`` / ``</tag`` boundaries
of that one tag name while keeping a depth counter.
"""

import re

from parsers.base import strip_tags

_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")


def strip_html_comments(html: str) -> str:
    return _COMMENT_RE.sub("", html)


def _boundary_re(tag: str) -> re.Pattern:
    return re.compile(rf"<(/?){re.escape(tag)}\b", re.IGNORECASE)


def find_matching_close(html: str, tag: str, pos: int) -> re.Match | None:
    """
    Find the ``</tag`` that closes an element whose opening tag ends at `pos`.
    Returns the match of the closing boundary, or None if the input ends first.
    """
    depth = 1
    for boundary in _boundary_re(tag).finditer(html, pos):
        depth += -1 if boundary.group(1) else 1
        if depth == 0:
            return boundary
    return None


def extract_element_inner_html(html: str, open_tag_re: re.Pattern) -> str | None:
    """
    Inner HTML of the first element matched by `open_tag_re`.
    The pattern's first group must capture the tag name.
    """
    m = open_tag_re.search(html)
    if not m or not m.group(1):
        return None
    tag = m.group(1).lower()
    close = find_matching_close(html, tag, m.end())
    if close is None:
        return None
    return html[m.end():close.start()]


def find_balanced_element(html: str, tag: str, start: int = 0) -> tuple[int, int] | None:
    """(start, end) offsets of the first complete `tag` element at or after `start`."""
    open_m = re.compile(rf"<{re.escape(tag)}\b[^>]*>", re.IGNORECASE).search(html, start)
    if not open_m:
        return None
    close = find_matching_close(html, tag, open_m.end())
    if close is None:
        return None
    close_end = html.find(">", close.start())
    if close_end == -1:
        return None
    return open_m.start(), close_end + 1


def extract_first(pattern: re.Pattern, html: str) -> str | None:
    """Tag-stripped first group of the first match, or None when absent or blank."""
    m = pattern.search(html)
    if not m or not m.group(1):
        return None
    return strip_tags(m.group(1)) or None


def extract_all(pattern: re.Pattern, html: str) -> list[str]:
    """Tag-stripped first group of every match, in document order."""
    return [strip_tags(m.group(1)) for m in pattern.finditer(html) if m.group(1)]
