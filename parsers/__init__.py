"""parsers/ — Saint-of-the-day, liturgy and verse parsers."""

from models import LiturgyDay, SaintOfDayRecord
from parsers.base import ParseError

SUPPORTED_KINDS = {"santo", "liturgia"}


def parse_document(kind: str, content, **options) -> SaintOfDayRecord | LiturgyDay:
    """Dispatch raw content (HTML page or liturgy JSON) to the matching parser."""
    if kind == "santo":
        from parsers.saint_parser import parse_saint_page
        return parse_saint_page(content, **options)
    elif kind == "liturgia":
        from parsers.liturgy_parser import parse_liturgy
        return parse_liturgy(content)
    else:
        raise ValueError(
            f"Unsupported document kind: '{kind}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_KINDS))}"
        )


__all__ = ["ParseError", "SUPPORTED_KINDS", "parse_document"]
