#!/usr/bin/env python3
"""
leitor — Saint of the day and daily liturgy readings in the terminal.

Sources: santo.cancaonova.com (HTML) and the liturgia.up.railway.app API (JSON).

Quick start:
  1. Optionally set LEITOR_SANTO_URL / LEITOR_LITURGIA_URL / LEITOR_TIMEOUT in .env
  2. python leitor.py santo
  3. python leitor.py liturgia --date 2026-10-18

Offline parsing of a saved page:
  python leitor.py santo --html-file santo.html --json
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from formatting import (
    capitalize_words_except_de,
    date_label,
    liturgical_color,
    long_date_label,
    render_tokens,
)
from models import Heading, ListBlock, PsalmReading, Quote
from parsers.liturgy_parser import psalm_verses, reading_tokens


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Read the saint of the day and the daily liturgy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Saint of the day, rendered as text:
  python leitor.py santo

  # Parse a saved page, no network:
  python leitor.py santo --html-file santo.html

  # Export the record as JSON:
  python leitor.py santo --json --output santo.json

  # A week of readings as JSON:
  python leitor.py liturgia --date 2026-10-18 --days 7 --json --output semana.json
        """,
    )
    commands = parser.add_subparsers(dest="command", required=True)

    santo = commands.add_parser("santo", help="Saint of the day")
    santo.add_argument("--url", type=str, default=None, help="Page to fetch (default: LEITOR_SANTO_URL)")
    santo.add_argument(
        "--html-file", type=Path, default=None, metavar="FILE",
        help="Parse a saved HTML page instead of fetching",
    )
    santo.add_argument(
        "--skip-phrase", action="append", default=[], metavar="TEXT",
        help="Extra boilerplate phrase to drop (repeatable)",
    )
    santo.add_argument("--json", action="store_true", help="Print the record as JSON")
    santo.add_argument("--output", type=Path, default=None, metavar="PATH", help="Write output to a file")

    liturgia = commands.add_parser("liturgia", help="Daily liturgy readings")
    liturgia.add_argument(
        "--date", type=date.fromisoformat, default=None, metavar="YYYY-MM-DD",
        help="First day to fetch (default: today)",
    )
    liturgia.add_argument("--days", type=int, default=1, metavar="N", help="Number of consecutive days (default: 1)")
    liturgia.add_argument("--json", action="store_true", help="Print the readings as JSON")
    liturgia.add_argument("--output", type=Path, default=None, metavar="PATH", help="Write output to a file")

    for sub in (santo, liturgia):
        sub.add_argument("--timeout", type=float, default=None, metavar="SECONDS", help="HTTP timeout")
    return parser.parse_args(argv)


def format_saint(record) -> str:
    title = record.title or "Santo do Dia"
    lines = [title, "=" * min(len(title), 70)]
    label = long_date_label(record) or date_label(record)
    if label:
        lines.append(capitalize_words_except_de(label))
    if record.image:
        lines.append(f"Imagem: {record.image}")
    lines.append("")

    if record.has_blocks:
        for block in record.blocks:
            if isinstance(block, ListBlock):
                for i, item in enumerate(block.items, start=1):
                    lines.append(f"  {i}. {item}" if block.ordered else f"  • {item}")
            elif isinstance(block, Heading):
                lines.append(f"{'#' * block.level} {block.text}")
            elif isinstance(block, Quote):
                lines.append(f"  > {block.text}")
            else:
                lines.append(block.text)
            lines.append("")
    else:
        lines.append(record.full_text or "Conteúdo indisponível.")
        lines.append("")

    if record.other_saints:
        lines.append("Outros santos do dia:")
        lines.extend(f"  • {name}" for name in record.other_saints)
    return "\n".join(lines).rstrip() + "\n"


def format_liturgy(day: date, liturgy) -> str:
    lines = [
        f"{day.isoformat()}  {liturgy.celebration}",
        f"Cor: {liturgy.color or '-'} ({liturgical_color(liturgy.color)})",
        "-" * 70,
    ]
    for label, reading in liturgy.pages():
        lines.append(f"{label} — {reading.reference}")
        if isinstance(reading, PsalmReading):
            if reading.refrain:
                lines.append(f"  R. {reading.refrain}")
            lines.extend(f"  {verse}" for verse in psalm_verses(reading.text))
        else:
            if reading.title:
                lines.append(f"  {reading.title}")
            lines.append(render_tokens(reading_tokens(reading)))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def liturgy_to_dict(day: date, liturgy) -> dict:
    pages = []
    for label, reading in liturgy.pages():
        pages.append({
            "label": label,
            "reference": reading.reference,
            "text": reading.text,
            "tokens": [
                {"is_verse_number": t.is_verse_number, "text": t.text}
                for t in reading_tokens(reading)
            ],
        })
    return {
        "date": day.isoformat(),
        "celebration": liturgy.celebration,
        "color": liturgy.color,
        "color_hex": liturgical_color(liturgy.color),
        "pages": pages,
    }


def emit(text: str, output: Path | None) -> None:
    if output is None:
        print(text, end="")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"Saved to: {output}")


def run_santo(args, settings) -> None:
    from fetcher import fetch_saint_of_day
    from parsers.saint_parser import DEFAULT_BOILERPLATE, parse_saint_page

    boilerplate = DEFAULT_BOILERPLATE + settings.skip_phrases + tuple(args.skip_phrase)

    if args.html_file:
        if not args.html_file.is_file():
            print(f"ERROR: File not found: {args.html_file}")
            sys.exit(1)
        html = args.html_file.read_bytes().decode("utf-8", errors="replace")
        record = parse_saint_page(html, boilerplate=boilerplate)
    else:
        url = args.url or settings.saint_url
        if not args.json and args.output is None:
            print(f"Fetching: {url}\n")
        record = fetch_saint_of_day(url, boilerplate=boilerplate, timeout=args.timeout or settings.timeout)

    if args.json:
        emit(json.dumps(record.to_dict(), ensure_ascii=False, indent=2) + "\n", args.output)
    else:
        emit(format_saint(record), args.output)


def run_liturgia(args, settings) -> None:
    from fetcher import fetch_liturgy_range

    if args.days < 1:
        print(f"ERROR: --days must be at least 1 (got {args.days})")
        sys.exit(1)

    start = args.date or date.today()
    results = fetch_liturgy_range(
        start, args.days, api_url=settings.liturgy_url, timeout=args.timeout or settings.timeout
    )

    if args.json:
        payload = [liturgy_to_dict(day, liturgy) for day, liturgy in results]
        emit(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", args.output)
    else:
        emit("\n".join(format_liturgy(day, liturgy) for day, liturgy in results), args.output)


def main(argv: list[str] | None = None):
    args = parse_args(argv)

    # Imported late to keep --help fast
    from fetcher import FetchError
    from parsers import ParseError
    from settings import load_settings

    settings = load_settings()

    try:
        if args.command == "santo":
            run_santo(args, settings)
        else:
            run_liturgia(args, settings)
    except FetchError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    except ParseError as e:
        print(f"ERROR: Unexpected response format: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
