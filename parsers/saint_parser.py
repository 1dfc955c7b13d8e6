"""parsers/saint_parser.py — Parse the "Saint of the Day" page into typed content blocks."""

import re
from typing import Iterable

from models import Heading, ListBlock, Paragraph, Quote, SaintContentBlock, SaintOfDayRecord
from parsers.base import ParseError, normalize_search_key, normalize_spaces, strip_diacritics, strip_tags
from parsers.html_scan import (
    extract_all,
    extract_element_inner_html,
    extract_first,
    find_balanced_element,
    find_matching_close,
    strip_html_comments,
)

# Promotional and navigation copy from santo.cancaonova.com. Matched
# case- and accent-insensitively as substrings.
DEFAULT_BOILERPLATE = (
    "COMPARTILHE NO",
    "AJUDE A CANCAO NOVA",
    "PEDIDO DE ORACAO",
    "APLICATIVO LITURGIA",
)
NOISE_FRAGMENTS = {".", "…", "-->", "->"}
OTHER_SAINTS_MARKER = "outros santos"

BAD_IMAGE_MARKERS = ("icon-x-ext", "device-liturgia", "pedido-thumb")
GOOD_IMAGE_MARKERS = ("uploads", "cnimages")

DATE_CONTAINER_RE = re.compile(r"""<([a-z0-9]+)[^>]*id=["']date-post["'][^>]*>""", re.IGNORECASE)
ENTRY_CONTENT_RE = re.compile(
    r"""<([a-z0-9]+)[^>]*class=["'][^"']*entry-content[^"']*["'][^>]*>""", re.IGNORECASE
)
TITLE_RE = re.compile(
    r"""<h1[^>]*class=["'][^"']*entry-title[^"']*["'][^>]*>([\s\S]*?)</h1>""", re.IGNORECASE
)
DAY_RE = re.compile(r"""class=["']dia["'][^>]*>([\s\S]*?)</""", re.IGNORECASE)
MONTH_RE = re.compile(r"""class=["']mes["'][^>]*>([\s\S]*?)</""", re.IGNORECASE)
YEAR_RE = re.compile(r"""class=["']ano["'][^>]*>([\s\S]*?)</""", re.IGNORECASE)

_IMG_RE = re.compile(r"""<img[^>]*src=["']([^"']+)["'][^>]*>""", re.IGNORECASE)
_IMAGE_EXT_RE = re.compile(r"\.(jpe?g|png|webp)(\?|$)")
_ELEMENT_RE = re.compile(r"<(p|h2|h3|h4|blockquote|ul|ol|strong|b)\b[^>]*>([\s\S]*?)</\1>", re.IGNORECASE)
_TEXT_BLOCK_RE = re.compile(r"<(p|h2|h3|h4)\b[^>]*>([\s\S]*?)</\1>", re.IGNORECASE)
_HEADING_RE = re.compile(r"<(h2|h3|h4)\b[^>]*>([\s\S]*?)</\1>", re.IGNORECASE)
_LIST_RE = re.compile(r"<(ul|ol)\b[^>]*>[\s\S]*?</\1>", re.IGNORECASE)
_LI_RE = re.compile(r"<li[^>]*>([\s\S]*?)</li>", re.IGNORECASE)
_BOLD_RE = re.compile(r"<(strong|b)\b[^>]*>([\s\S]*?)</\1>", re.IGNORECASE)
# <p><span><strong>Only this</strong></span></p>, with no second bold run inside.
_BOLD_ONLY_RE = re.compile(
    r"^(?:<span\b[^>]*>\s*)*<(strong|b)\b[^>]*>(?:(?!<(?:strong|b)\b)[\s\S])*?</\1>\s*(?:</span>\s*)*$",
    re.IGNORECASE,
)


def _phrase_keys(boilerplate: Iterable[str]) -> tuple[str, ...]:
    return tuple(key for key in (normalize_search_key(p.strip()) for p in boilerplate) if key)


def _should_skip(text: str, phrase_keys: tuple[str, ...]) -> bool:
    cleaned = normalize_spaces(text)
    if not cleaned or cleaned in NOISE_FRAGMENTS:
        return True
    key = normalize_search_key(cleaned)
    return any(phrase in key for phrase in phrase_keys)


def normalize_month_abbrev(value: str | None) -> str | None:
    """'out.' -> 'OUT', 'Março' -> 'MAR'."""
    if not value or not value.strip():
        return None
    return strip_diacritics(value.strip()).upper()[:3] or None


def extract_date_parts(html: str) -> tuple[str | None, str | None, str | None]:
    """(day, month, year) from the date-post container, falling back to the whole page."""
    container = extract_element_inner_html(html, DATE_CONTAINER_RE)
    if container is None:
        container = html
    day = extract_first(DAY_RE, container)
    month_raw = extract_first(MONTH_RE, container)
    year = extract_first(YEAR_RE, container)
    return day, normalize_month_abbrev(month_raw) or month_raw, year


def extract_title(html: str) -> str:
    title = extract_first(TITLE_RE, html)
    if title is None:
        raise ParseError("No entry-title heading found")
    return normalize_spaces(title)


def extract_entry_content(html: str) -> str:
    entry = extract_element_inner_html(html, ENTRY_CONTENT_RE)
    if entry is None:
        raise ParseError("No balanced entry-content region found")
    return entry


def find_image_candidates(entry_html: str) -> list[str]:
    return [m.group(1) for m in _IMG_RE.finditer(entry_html)]


def _is_bad_image(src: str) -> bool:
    s = src.lower()
    return any(marker in s for marker in BAD_IMAGE_MARKERS)


def _is_good_image(src: str) -> bool:
    s = src.lower()
    return bool(_IMAGE_EXT_RE.search(s)) or any(marker in s for marker in GOOD_IMAGE_MARKERS)


def choose_best_image(candidates: Iterable[str]) -> str | None:
    """First content-looking image that is not an icon, else first non-icon, else None."""
    acceptable = [src for src in candidates if src and not _is_bad_image(src)]
    for src in acceptable:
        if _is_good_image(src):
            return src
    return acceptable[0] if acceptable else None


def find_other_saints_index(entry_html: str) -> int | None:
    """Offset of the h2-h4 heading that opens the "outros santos" section."""
    for m in _HEADING_RE.finditer(entry_html):
        if OTHER_SAINTS_MARKER in normalize_search_key(strip_tags(m.group(2))):
            return m.start()
    return None


def _list_items(list_html: str) -> list[str]:
    items = (normalize_spaces(text) for text in extract_all(_LI_RE, list_html))
    return [item for item in items if item]


def _push_text(blocks: list, make_block, text: str, phrase_keys: tuple[str, ...]) -> None:
    cleaned = normalize_spaces(text)
    if _should_skip(cleaned, phrase_keys):
        return
    blocks.append(make_block(cleaned))


def _push_heading3(blocks: list, html: str, phrase_keys: tuple[str, ...]) -> None:
    _push_text(blocks, lambda text: Heading(3, text), strip_tags(html), phrase_keys)


def _push_paragraph(blocks: list, html: str, phrase_keys: tuple[str, ...]) -> None:
    _push_text(blocks, Paragraph, strip_tags(html), phrase_keys)


def _paragraph_blocks(inner: str, blocks: list, phrase_keys: tuple[str, ...]) -> None:
    """Split a <p> at its bold runs: text before, bold as h3, repeat, trailing text."""
    if _BOLD_ONLY_RE.match(inner.strip()):
        _push_heading3(blocks, inner, phrase_keys)
        return

    last = 0
    has_bold = False
    for bold in _BOLD_RE.finditer(inner):
        has_bold = True
        _push_paragraph(blocks, inner[last:bold.start()], phrase_keys)
        _push_heading3(blocks, bold.group(2), phrase_keys)
        last = bold.end()

    if has_bold:
        _push_paragraph(blocks, inner[last:], phrase_keys)
    else:
        _push_paragraph(blocks, inner, phrase_keys)


def extract_content_blocks(
    entry_html: str, boilerplate: Iterable[str] = DEFAULT_BOILERPLATE
) -> list[SaintContentBlock]:
    """
    Turn the content region into ordered blocks.

    Everything from the "outros santos" heading onward is excluded. Bold runs
    that stand on their own (top-level or a whole paragraph) become level-3
    headings, which is how the source site marks sub-sections.
    """
    phrase_keys = _phrase_keys(boilerplate)
    cut = find_other_saints_index(entry_html)
    html = entry_html[:cut] if cut is not None else entry_html

    blocks: list[SaintContentBlock] = []
    pos = 0
    while (m := _ELEMENT_RE.search(html, pos)) is not None:
        tag = m.group(1).lower()
        inner = m.group(2)
        pos = m.end()

        if tag in ("ul", "ol"):
            # Nested lists would end the lazy match early, so rebalance.
            close = find_matching_close(html, tag, m.start(2))
            if close is not None:
                inner = html[m.start(2):close.start()]
                close_end = html.find(">", close.start())
                pos = close_end + 1 if close_end != -1 else close.end()
            items = [item for item in _list_items(inner) if not _should_skip(item, phrase_keys)]
            if items:
                blocks.append(ListBlock(ordered=tag == "ol", items=tuple(items)))
        elif tag in ("strong", "b"):
            _push_heading3(blocks, inner, phrase_keys)
        elif tag == "p":
            _paragraph_blocks(inner, blocks, phrase_keys)
        elif tag == "blockquote":
            _push_text(blocks, Quote, strip_tags(inner), phrase_keys)
        else:
            level = int(tag[1])
            _push_text(blocks, lambda text: Heading(level, text), strip_tags(inner), phrase_keys)

    return blocks


def extract_text_blocks(entry_html: str, boilerplate: Iterable[str] = DEFAULT_BOILERPLATE) -> str | None:
    """Plain-text rendition of the region's paragraphs and headings, blank-line separated."""
    phrase_keys = _phrase_keys(boilerplate)
    texts = []
    for m in _TEXT_BLOCK_RE.finditer(entry_html):
        text = re.sub(r"\s{2,}", " ", strip_tags(m.group(2))).strip()
        if _should_skip(text, phrase_keys):
            continue
        texts.append(text)
    return "\n\n".join(texts) if texts else None


def _first_list_after(entry_html: str, start: int) -> str | None:
    """Outer HTML of whichever balanced <ul> or <ol> opens first after `start`."""
    spans = [find_balanced_element(entry_html, tag, start) for tag in ("ul", "ol")]
    spans = [span for span in spans if span is not None]
    if not spans:
        return None
    begin, end = min(spans)
    return entry_html[begin:end]


def _list_score(items: list[str]) -> int:
    located = sum(1 for item in items if re.match(r"em\s+", item, re.IGNORECASE))
    deceased = sum(1 for item in items if "†" in item)
    return len(items) + located * 2 + deceased


def extract_other_saints(entry_html: str) -> list[str] | None:
    """
    Names listed under the "outros santos" heading.

    Without that heading (or a list after it), pick the list that looks most
    like a martyrology: at least three entries, favouring "Em <place>, ..."
    lines and entries marked with a dagger.
    """
    cut = find_other_saints_index(entry_html)
    if cut is not None:
        list_html = _first_list_after(entry_html, cut)
        if list_html:
            items = _list_items(list_html)
            if items:
                return items

    best_items, best_score = None, None
    for m in _LIST_RE.finditer(entry_html):
        items = _list_items(m.group(0))
        if len(items) < 3:
            continue
        score = _list_score(items)
        if best_score is None or score > best_score:
            best_items, best_score = items, score
    return best_items


def _optional(step, *args, default=None):
    try:
        return step(*args)
    except ParseError:
        return default


def parse_saint_page(html: str, boilerplate: Iterable[str] = DEFAULT_BOILERPLATE) -> SaintOfDayRecord:
    """
    Main entry point. Never raises on malformed markup: every field that cannot
    be located comes back as None (or an empty block tuple).
    """
    boilerplate = tuple(boilerplate)
    html = strip_html_comments(html)

    day, month, year = extract_date_parts(html)
    title = _optional(extract_title, html)
    entry = _optional(extract_entry_content, html)
    if not entry:
        return SaintOfDayRecord(day=day, month=month, year=year, title=title)

    other_saints = extract_other_saints(entry)
    return SaintOfDayRecord(
        day=day,
        month=month,
        year=year,
        title=title,
        image=choose_best_image(find_image_candidates(entry)),
        blocks=tuple(extract_content_blocks(entry, boilerplate)),
        full_text=extract_text_blocks(entry, boilerplate),
        other_saints=tuple(other_saints) if other_saints else None,
    )
