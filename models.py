"""models.py — Shared data types for leitor."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Heading:
    level: int       # 2, 3 or 4
    text: str

    def to_dict(self) -> dict:
        return {"type": f"h{self.level}", "text": self.text}


@dataclass(frozen=True)
class Paragraph:
    text: str

    def to_dict(self) -> dict:
        return {"type": "p", "text": self.text}


@dataclass(frozen=True)
class Quote:
    text: str

    def to_dict(self) -> dict:
        return {"type": "blockquote", "text": self.text}


@dataclass(frozen=True)
class ListBlock:
    ordered: bool
    items: tuple[str, ...]

    def to_dict(self) -> dict:
        return {"type": "ol" if self.ordered else "ul", "items": list(self.items)}


SaintContentBlock = Heading | Paragraph | Quote | ListBlock


@dataclass(frozen=True)
class SaintOfDayRecord:
    day: str | None = None
    month: str | None = None        # "JAN".."DEZ", see formatting.month_label_pt
    year: str | None = None
    title: str | None = None
    image: str | None = None
    blocks: tuple[SaintContentBlock, ...] = ()
    full_text: str | None = None    # Plain-text fallback when blocks is empty
    other_saints: tuple[str, ...] | None = None

    @property
    def has_blocks(self) -> bool:
        return len(self.blocks) > 0

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "month": self.month,
            "year": self.year,
            "title": self.title,
            "image": self.image,
            "content_blocks": [block.to_dict() for block in self.blocks],
            "full_text": self.full_text,
            "outros_santos": list(self.other_saints) if self.other_saints else None,
        }


@dataclass(frozen=True)
class RenderToken:
    is_verse_number: bool
    text: str


@dataclass(frozen=True)
class Reading:
    reference: str   # e.g. "Eclo 3, 3-7. 14-17a"
    title: str
    text: str


@dataclass(frozen=True)
class PsalmReading:
    reference: str
    refrain: str
    text: str        # One verse per line


@dataclass(frozen=True)
class LiturgyDay:
    date: str
    celebration: str
    color: str
    first_reading: Reading | None = None
    psalm: PsalmReading | None = None
    second_reading: Reading | None = None
    gospel: Reading | None = None

    def pages(self) -> list[tuple[str, Reading | PsalmReading]]:
        """Readings in display order, skipping the ones the day does not have."""
        labelled = [
            ("1ª Leitura", self.first_reading),
            ("Salmo", self.psalm),
            ("2ª Leitura", self.second_reading),
            ("Evangelho", self.gospel),
        ]
        return [(label, reading) for label, reading in labelled if reading is not None]
