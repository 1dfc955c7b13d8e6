"""parsers/verse_parser.py — Recover verse-number boundaries in flattened scripture text.

Reading texts arrive with verse numbers glued to the words around them
("16mas disse", "17O Senhor"). The citation ("Eclo 3, 3-7. 14-17a") says
which numbers can be verses. A running "last verse" counter also accepts the
next number in sequence. Anything else is left alone, so a year or quantity
glued to a word is never highlighted.
"""

import re

from models import RenderToken

_RANGE_RE = re.compile(r"([0-9]+)([a-d])?\s*[-–]\s*([0-9]+)([a-d])?")
_SINGLE_RE = re.compile(r"([0-9]+)([a-d])?")
_APOSTROPHE_GLUE_RE = re.compile(r"([0-9]+)[‘’'´`′](?=[A-Za-zÀ-ÖØ-öø-ÿ\"“])")
# 1/2: digits glued to lowercase letters; 3: digits before an uppercase
# letter or opening quote; 4: any other digit run.
_TOKEN_RE = re.compile(r"([0-9]+)([a-zçñ]+)|([0-9]+)(?=[A-ZÀ-Ú\"“])|([0-9]+)")
_SPLIT_RE = re.compile(r"([0-9]+[a-d]?)(?=\s)")
_VERSE_TOKEN_RE = re.compile(r"[0-9]+[a-d]?")
# No biblical chapter has more verses than Psalm 119.
MAX_RANGE_SPAN = 176


def valid_verses(reference: str) -> frozenset[str]:
    """
    Verse tokens a citation allows. Ranges contribute every number they span
    (plus the lettered end, e.g. "17a"); every standalone number contributes
    itself and its lettered form.
    """
    verses = set()
    for m in _RANGE_RE.finditer(reference):
        start, end, end_letter = int(m.group(1)), int(m.group(3)), m.group(4)
        if start > end or end - start >= MAX_RANGE_SPAN:
            continue
        verses.update(str(n) for n in range(start, end + 1))
        if end_letter:
            verses.add(f"{end}{end_letter}")

    for m in _SINGLE_RE.finditer(reference):
        number, letter = m.group(1), m.group(2)
        verses.add(number)
        if letter:
            verses.add(number + letter)

    return frozenset(verses)


def unglue_apostrophes(text: str) -> str:
    """Turn "24'O Senhor" into "24 O Senhor"."""
    return _APOSTROPHE_GLUE_RE.sub(r"\1 ", text)


def _is_sequential(number: int, last: int) -> bool:
    return last > 0 and number == last + 1


def classify_match(m: re.Match, valid: frozenset[str], last: int) -> tuple[str, int]:
    """
    Rewrite one digit-run match. Returns (replacement, new last verse number);
    `last` only moves when the match is confirmed as a verse.
    """
    glued_num, letters, upper_num, bare_num = m.groups()

    if glued_num:
        number = int(glued_num)
        first, rest = letters[0], letters[1:]
        if f"{glued_num}{first}" in valid:
            return f"{glued_num}{first} {rest}", number
        if glued_num in valid or _is_sequential(number, last):
            return f"{glued_num} {letters}", number
        return m.group(0), last

    if upper_num:
        number = int(upper_num)
        if upper_num in valid or _is_sequential(number, last):
            return f"{upper_num} ", number
        return m.group(0), last

    number = int(bare_num)
    if bare_num in valid or _is_sequential(number, last):
        return m.group(0), number
    return m.group(0), last


def mark_verse_boundaries(text: str, valid: frozenset[str]) -> str:
    """Insert a space after every digit run confirmed as a verse number."""
    pieces = []
    last = 0
    pos = 0
    for m in _TOKEN_RE.finditer(text):
        replacement, last = classify_match(m, valid, last)
        pieces.append(text[pos:m.start()])
        pieces.append(replacement)
        pos = m.end()
    pieces.append(text[pos:])
    return "".join(pieces)


def split_render_tokens(text: str) -> list[RenderToken]:
    tokens = []
    for fragment in _SPLIT_RE.split(text):
        if not fragment:
            continue
        tokens.append(RenderToken(is_verse_number=bool(_VERSE_TOKEN_RE.fullmatch(fragment)), text=fragment))
    return tokens


def tokenize(body: str, reference: str = "") -> list[RenderToken]:
    """Main entry point. Total: any body/reference pair yields a token list."""
    valid = valid_verses(reference or "")
    cleaned = mark_verse_boundaries(unglue_apostrophes(body or ""), valid)
    return split_render_tokens(cleaned)
