"""parsers/base.py — Shared parser utilities and types."""

import re
import unicodedata
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

# Fragments like "foto.jpg" are legitimate markup here, not file names.
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

_BR_RE = re.compile(r"<\s*br\s*/?\s*>", re.IGNORECASE)
_P_CLOSE_RE = re.compile(r"<\s*/\s*p\s*>", re.IGNORECASE)
_COMBINING_RE = re.compile("[\u0300-\u036f]")


class ParseError(ValueError):
    """Expected markup or payload structure is missing."""


def strip_tags(fragment: str) -> str:
    """Drop markup from an HTML fragment, keeping line breaks and decoding entities."""
    text = _BR_RE.sub("\n", fragment)
    text = _P_CLOSE_RE.sub("\n\n", text)
    if "<" in text or "&" in text:
        text = BeautifulSoup(text, "html.parser").get_text()
    text = text.replace("\r", "")
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def normalize_spaces(text: str) -> str:
    """Collapse horizontal whitespace and trim spaces around line breaks."""
    text = text.replace("\u00a0", " ")
    text = re.sub(r"[ \t]{2,}", " ", text)
    text = re.sub(r"\n[ \t]+", "\n", text)
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def strip_diacritics(text: str) -> str:
    return _COMBINING_RE.sub("", unicodedata.normalize("NFD", text))


def normalize_search_key(text: str) -> str:
    """Lower-cased, accent-free form used for phrase matching."""
    return strip_diacritics(text).lower()
