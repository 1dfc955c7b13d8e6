"""formatting.py — Portuguese date labels, title casing and terminal rendering of verses."""

import re
from datetime import date

from models import RenderToken, SaintOfDayRecord
from parsers.base import strip_diacritics

MONTH_NAMES_PT = {
    "JAN": "janeiro",
    "FEV": "fevereiro",
    "MAR": "março",
    "ABR": "abril",
    "MAI": "maio",
    "JUN": "junho",
    "JUL": "julho",
    "AGO": "agosto",
    "SET": "setembro",
    "OUT": "outubro",
    "NOV": "novembro",
    "DEZ": "dezembro",
}

LITURGICAL_COLORS = {
    "branco": "#FFFFFF",
    "white": "#FFFFFF",
    "verde": "#4CAF50",
    "green": "#4CAF50",
    "roxo": "#9C27B0",
    "purple": "#9C27B0",
    "vermelho": "#F44336",
    "red": "#F44336",
    "rosa": "#E91E63",
    "rose": "#E91E63",
}

WEEKDAYS_PT = (
    "segunda-feira",
    "terça-feira",
    "quarta-feira",
    "quinta-feira",
    "sexta-feira",
    "sábado",
    "domingo",
)

DEFAULT_LITURGICAL_COLOR = "#7f8c8d"

_SUPERSCRIPT = str.maketrans("0123456789abcd", "⁰¹²³⁴⁵⁶⁷⁸⁹ᵃᵇᶜᵈ")
_WORD_RE = re.compile(r"^([\W\d_]*)([^\W\d_]+(?:-[^\W\d_]+)*)([\W\d_]*)$")


def month_label_pt(month: str | None) -> str | None:
    """'OUT' -> 'outubro'. Unknown values come back trimmed."""
    if not month or not month.strip():
        return None
    key = strip_diacritics(month.strip()).upper()[:3]
    return MONTH_NAMES_PT.get(key, month.strip())


def month_index(month: str | None) -> int | None:
    """Zero-based month number, or None when the label is not a known month."""
    label = month_label_pt(month)
    names = list(MONTH_NAMES_PT.values())
    return names.index(label) if label in names else None


def capitalize_words_except_de(value: str) -> str:
    """'são joão de brito' -> 'São João de Brito'; hyphenated parts are capitalized too."""
    words = []
    for part in value.split(" "):
        m = _WORD_RE.match(part)
        if not part or not m:
            words.append(part)
            continue
        leading, core, trailing = m.groups()
        if core.lower() == "de":
            words.append(f"{leading}de{trailing}")
            continue
        core = "-".join(p[0].upper() + p[1:] if p else p for p in core.split("-"))
        words.append(f"{leading}{core}{trailing}")
    return " ".join(words)


def date_label(record: SaintOfDayRecord) -> str:
    day = (record.day or "").strip()
    year = (record.year or "").strip()
    month = month_label_pt(record.month)
    if day and month and year:
        return f"{day} de {month} de {year}"
    return " ".join(part for part in (day, record.month, year) if part)


def long_date_label(record: SaintOfDayRecord) -> str:
    """'domingo, 18 de outubro de 2026', or '' when the parts do not form a date."""
    index = month_index(record.month)
    try:
        day = date(int((record.year or "").strip()), index + 1, int((record.day or "").strip()))
    except (TypeError, ValueError):
        return ""
    month = list(MONTH_NAMES_PT.values())[index]
    return f"{WEEKDAYS_PT[day.weekday()]}, {day.day} de {month} de {day.year}"


def liturgical_color(name: str | None) -> str:
    return LITURGICAL_COLORS.get((name or "").strip().lower(), DEFAULT_LITURGICAL_COLOR)


def superscript(text: str) -> str:
    return text.translate(_SUPERSCRIPT)


def render_tokens(tokens: list[RenderToken]) -> str:
    """Join tokens back into text, raising verse numbers to superscript."""
    return "".join(superscript(t.text) if t.is_verse_number else t.text for t in tokens)
