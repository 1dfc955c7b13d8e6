"""parsers/liturgy_parser.py — Map the daily-liturgy API payload onto typed readings."""

import json
import re

from models import LiturgyDay, PsalmReading, Reading, RenderToken
from parsers.base import ParseError
from parsers.verse_parser import tokenize


def _first_entry(readings: dict, key: str) -> dict | None:
    entries = readings.get(key)
    if not isinstance(entries, list) or not entries:
        return None
    entry = entries[0]
    if not isinstance(entry, dict) or not str(entry.get("texto") or "").strip():
        return None
    return entry


def _reading(readings: dict, key: str) -> Reading | None:
    entry = _first_entry(readings, key)
    if entry is None:
        return None
    return Reading(
        reference=str(entry.get("referencia") or "").strip(),
        title=str(entry.get("titulo") or "").strip(),
        text=str(entry["texto"]).strip(),
    )


def _psalm(readings: dict) -> PsalmReading | None:
    entry = _first_entry(readings, "salmo")
    if entry is None:
        return None
    return PsalmReading(
        reference=str(entry.get("referencia") or "").strip(),
        refrain=str(entry.get("refrao") or "").strip(),
        text=str(entry["texto"]).strip(),
    )


def parse_liturgy(payload: dict | str) -> LiturgyDay:
    """Build a LiturgyDay from the decoded JSON object (or its raw text)."""
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ParseError(f"Liturgy payload is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ParseError(f"Liturgy payload must be a JSON object, got {type(payload).__name__}")

    readings = payload.get("leituras") or {}
    if not isinstance(readings, dict):
        raise ParseError("'leituras' must be an object")

    return LiturgyDay(
        date=str(payload.get("data") or ""),
        celebration=str(payload.get("liturgia") or ""),
        color=str(payload.get("cor") or ""),
        first_reading=_reading(readings, "primeiraLeitura"),
        psalm=_psalm(readings),
        second_reading=_reading(readings, "segundaLeitura"),
        gospel=_reading(readings, "evangelho"),
    )


def reading_tokens(reading: Reading | PsalmReading) -> list[RenderToken]:
    return tokenize(reading.text, reading.reference)


def psalm_verses(text: str) -> list[str]:
    """One entry per non-blank line, without the leading dialogue dash."""
    verses = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        verses.append(re.sub(r"^[—–] ", "", line))
    return verses
