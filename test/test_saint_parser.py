import pytest

from models import Heading, ListBlock, Paragraph, Quote, SaintOfDayRecord
from parsers import parse_document
from parsers import saint_parser as s
from parsers.base import ParseError, normalize_search_key


def test_parse_saint_page(saint_page):
    record = s.parse_saint_page(saint_page)

    assert (record.day, record.month, record.year) == ("18", "OUT", "2026")
    assert record.title == "São Lucas, Evangelista"
    assert record.image == "https://img.cancaonova.com/cnimages/uploads/sao-lucas.jpg"
    assert record.blocks == (
        Heading(3, "Quem foi São Lucas"),
        Paragraph("Lucas era médico em Antioquia."),
        Paragraph("Escreveu o"),
        Heading(3, "Evangelho"),
        Paragraph("e os Atos."),
        Heading(2, "Sua missão"),
        Quote("Lucas, o médico amado, vos saúda."),
        ListBlock(ordered=False, items=("Padroeiro dos médicos",)),
        Heading(3, "Oração"),
    )
    assert record.other_saints == ("Em Roma, santo Justo", "São Pedro de Alcântara")


def test_parse_saint_page_full_text(saint_page):
    record = s.parse_saint_page(saint_page)

    assert record.full_text.startswith(
        "Quem foi São Lucas\n\nLucas era médico em Antioquia.\n\nEscreveu o Evangelho e os Atos."
    )
    assert "Compartilhe" not in record.full_text
    assert "Rodapé" not in record.full_text


def test_parse_saint_page_is_deterministic(saint_page):
    assert s.parse_saint_page(saint_page) == s.parse_saint_page(saint_page)


def test_other_saints_list_is_not_a_content_block(saint_page):
    record = s.parse_saint_page(saint_page)
    listed = [item for block in record.blocks if isinstance(block, ListBlock) for item in block.items]
    assert "São Pedro de Alcântara" not in listed


def test_parse_document_dispatches_saint_page(saint_page):
    assert parse_document("santo", saint_page) == s.parse_saint_page(saint_page)
    with pytest.raises(ValueError, match="Unsupported"):
        parse_document("catecismo", saint_page)


def test_missing_content_region_degrades_fields():
    record = s.parse_saint_page("<html><h1 class='entry-title'>Santa Teresa</h1></html>")
    assert record == SaintOfDayRecord(title="Santa Teresa")
    assert not record.has_blocks


def test_unbalanced_content_region_degrades_fields():
    record = s.parse_saint_page('<div class="entry-content"><p>Texto</p>')
    assert record.blocks == ()
    assert record.full_text is None
    assert record.other_saints is None
    assert record.title is None


def test_strict_helpers_raise():
    with pytest.raises(ParseError):
        s.extract_title("<h1>sem classe</h1>")
    with pytest.raises(ParseError):
        s.extract_entry_content("<div class='content'></div>")


def test_date_parts_without_container_use_whole_page():
    html = '<span class="dia">2</span><span class="mes">Março</span><span class="ano">2027</span>'
    assert s.extract_date_parts(html) == ("2", "MAR", "2027")


@pytest.mark.parametrize(
    "input,expected",
    [
        ("Out", "OUT"),
        (" março ", "MAR"),
        ("DEZEMBRO", "DEZ"),
        ("", None),
        ("   ", None),
        (None, None),
    ],
)
def test_normalize_month_abbrev(input, expected):
    assert s.normalize_month_abbrev(input) == expected


@pytest.mark.parametrize(
    "candidates,expected",
    [
        (
            ["https://santo.cancaonova.com/icon-x-ext.png", "https://img.cancaonova.com/uploads/foto.jpg"],
            "https://img.cancaonova.com/uploads/foto.jpg",
        ),
        (["https://x/device-liturgia.png", "https://x/pedido-thumb.jpg"], None),
        (["https://x/icon-x-ext.png", "https://x/avatar"], "https://x/avatar"),
        (["https://x/avatar", "https://x/foto.JPG?w=300"], "https://x/foto.JPG?w=300"),
        ([], None),
    ],
)
def test_choose_best_image(candidates, expected):
    assert s.choose_best_image(candidates) == expected


@pytest.mark.parametrize(
    "html,expected",
    [
        # A paragraph that is one bold run, optionally wrapped in spans
        ("<p><strong>Título</strong></p>", [Heading(3, "Título")]),
        ("<p><span style='x'><b>Título</b></span></p>", [Heading(3, "Título")]),
        # Two bold runs interleave with the plain text between them
        (
            "<p><strong>A</strong> meio <strong>B</strong></p>",
            [Heading(3, "A"), Paragraph("meio"), Heading(3, "B")],
        ),
        # Top-level bold outside any paragraph
        ("<div><strong>Oração</strong></div>", [Heading(3, "Oração")]),
        ("<h4>Nota</h4>", [Heading(4, "Nota")]),
        ("<ol><li>um</li><li>dois</li></ol>", [ListBlock(ordered=True, items=("um", "dois"))]),
        # Empty, noise and boilerplate fragments never become blocks
        ("<p>  </p><p>…</p><h2>-&gt;</h2><ul><li> </li></ul>", []),
        ("<p>Ajude a Canção Nova!</p><p>Faça seu pedido de oração</p>", []),
    ],
)
def test_extract_content_blocks(html, expected):
    assert s.extract_content_blocks(html) == expected


def test_nested_lists_stay_in_one_block():
    html = "<ul><li>Um<ul><li>Dois</li></ul></li><li>Três</li></ul><p>Depois</p>"
    blocks = s.extract_content_blocks(html)
    assert len(blocks) == 2
    assert blocks[0].items[-1] == "Três"
    assert blocks[1] == Paragraph("Depois")


def test_boilerplate_is_injectable():
    html = "<p>Baixe nosso app</p><p>Compartilhe no Facebook</p>"
    assert s.extract_content_blocks(html, boilerplate=("baixe nosso app",)) == [
        Paragraph("Compartilhe no Facebook")
    ]


@pytest.mark.parametrize(
    "html",
    [
        "<p>Compartilhe no <b>Facebook</b></p><p><b> </b>x</p>",
        "<strong></strong><b>.</b><blockquote>Aplicativo Liturgia Diária</blockquote>",
        "<ul><li>Pedido de Oração</li></ul><h3>\n</h3><p>ok</p>",
    ],
)
def test_blocks_are_never_empty_or_boilerplate(html):
    for block in s.extract_content_blocks(html):
        texts = block.items if isinstance(block, ListBlock) else (block.text,)
        for text in texts:
            assert text.strip()
            key = normalize_search_key(text)
            assert not any(normalize_search_key(p) in key for p in s.DEFAULT_BOILERPLATE)


def test_other_saints_prefers_first_list_after_heading():
    html = "<ul><li>x</li></ul><h2>Outros Santos</h2><ol><li>A</li></ol><ul><li>B</li></ul>"
    assert s.extract_other_saints(html) == ["A"]


def test_other_saints_fallback_scores_lists():
    html = (
        "<ul><li>a</li><li>b</li></ul>"
        "<ol><li>Em Roma, x</li><li>Em Lyon, y †</li><li>z</li></ol>"
        "<ul><li>1</li><li>2</li><li>3</li><li>4</li></ul>"
    )
    assert s.extract_other_saints(html) == ["Em Roma, x", "Em Lyon, y †", "z"]


def test_other_saints_fallback_when_heading_has_no_list():
    html = "<ul><li>a</li><li>b</li><li>c</li></ul><h3>Outros santos</h3><p>nada</p>"
    assert s.extract_other_saints(html) == ["a", "b", "c"]


def test_other_saints_none_without_candidates():
    assert s.extract_other_saints("<ul><li>a</li><li>b</li></ul>") is None


def test_text_blocks_none_when_everything_is_filtered():
    assert s.extract_text_blocks("<p>Compartilhe no X</p><div>solto</div>") is None
