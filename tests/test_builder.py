"""Tests for PdfBuilder pagination."""

import asyncio

import pytest

from fakes import FailingDocument, FakeDocument, FakeFont
from pageflow.builder import BuilderState, PdfBuilder
from pageflow.errors import BuilderNotInitializedError
from pageflow.layout_config import LayoutConfig

# Round numbers keep the arithmetic readable: with the fake font a size 10
# line is 12 high, plus 2 inter-line = 14 per line.
PAGE_SIZE = (595, 842)


def run(coro):
    """Drive a builder coroutine to completion."""
    return asyncio.run(coro)


def make_builder(doc=None, **options):
    doc = doc if doc is not None else FakeDocument()
    options.setdefault("page_size", PAGE_SIZE)
    return run(PdfBuilder.create(doc, **options))


def test_create_starts_first_page():
    """Test that create() adds the first page and places the cursor."""
    doc = FakeDocument()
    builder = make_builder(doc)

    assert builder.is_ready
    assert builder.state is BuilderState.READY
    assert builder.page_number == 1
    assert len(doc.pages) == 1
    assert builder.page is doc.pages[0]
    assert builder.page.get_x() == 25
    assert builder.page.get_y() == 842 - 60


def test_default_font_is_loaded_once():
    """Test that the default font is embedded once and reused."""
    doc = FakeDocument()
    builder = make_builder(doc)
    run(builder.add_page())
    run(builder.add_page())

    assert doc.embedded == ["Times-Roman"]
    assert all(page.font is builder.font for page in doc.pages)


def test_explicit_font_is_used():
    """Test that a configured font skips embedding the default."""
    doc = FakeDocument()
    font = FakeFont("Explicit")
    builder = make_builder(doc, font=font)

    assert doc.embedded == []
    assert builder.get_font() is font
    assert doc.pages[0].font is font


def test_get_width():
    """Test the width between the cursor and the right margin."""
    builder = make_builder()
    assert builder.get_width() == 595 - (25 + 25)
    # Querying twice gives the same answer
    assert builder.get_width() == builder.get_width()


def test_get_width_follows_margins():
    """Test get_width with custom margins."""
    builder = make_builder(left_margin=50, right_margin=70)
    assert builder.get_width() == 595 - 120


def test_draw_line_moves_cursor_down():
    """Test that a line is drawn below the cursor and the cursor advances."""
    doc = FakeDocument()
    builder = make_builder(doc)
    run(builder.draw_line("Hello"))

    page = doc.pages[0]
    assert page.drawn == [("Hello", 25, 782 - 12, 10, 10)]
    assert page.get_y() == 782 - 14


def test_draw_line_with_explicit_size_and_position():
    """Test draw_line with text_size and left_pos."""
    doc = FakeDocument()
    builder = make_builder(doc)
    run(builder.draw_line("Big", text_size=20, left_pos=100))

    page = doc.pages[0]
    assert page.drawn == [("Big", 100, 782 - 24, 20, 20)]
    assert page.get_y() == 782 - 26


def test_empty_line_takes_space_without_drawing():
    """Test that empty lines only move the cursor."""
    doc = FakeDocument()
    builder = make_builder(doc)
    run(builder.draw_line(""))
    run(builder.add_blank_line())

    assert doc.pages[0].drawn == []
    assert doc.pages[0].get_y() == 782 - 28


def test_page_breaks_when_space_runs_out():
    """Test that a new page starts when a line would enter the bottom margin."""
    doc = FakeDocument()
    pages_seen = []
    builder = make_builder(doc, on_add_page=lambda b, n: pages_seen.append(n))

    # (842 - 60 - 25) / 14 = 54.07, so 54 lines fit on a page
    for i in range(54):
        run(builder.draw_line(f"Line {i + 1}"))
    assert builder.page_number == 1
    assert pages_seen == [1]

    run(builder.draw_line("Line 55"))
    assert builder.page_number == 2
    assert pages_seen == [1, 2]
    assert len(doc.pages[0].drawn) == 54
    assert doc.pages[1].drawn == [("Line 55", 25, 782 - 12, 10, 10)]


def test_cursor_stays_within_margins():
    """Test that nothing is drawn inside the bottom margin."""
    doc = FakeDocument()
    builder = make_builder(doc)
    for i in range(200):
        run(builder.draw_line(f"Line {i}"))
        y = builder.page.get_y()
        assert 25 <= y <= 842 - 60
    for page in doc.pages:
        for _, _, y, _, _ in page.drawn:
            assert y >= 25


def test_page_numbers_increase_by_one():
    """Test page numbering across explicit page breaks."""
    numbers = []
    builder = make_builder(on_add_page=lambda b, n: numbers.append(n))
    for _ in range(3):
        run(builder.add_page())

    assert builder.page_number == 4
    assert numbers == [1, 2, 3, 4]


def test_async_page_callback_is_awaited():
    """Test that a coroutine page callback is awaited."""
    events = []

    async def on_add_page(builder, page_number):
        await asyncio.sleep(0)
        events.append((builder.page_number, page_number))

    builder = make_builder(on_add_page=on_add_page)
    run(builder.add_page())

    assert events == [(1, 1), (2, 2)]


def test_page_callback_can_draw_a_header():
    """Test drawing from inside the page callback."""
    doc = FakeDocument()

    async def header(builder, page_number):
        await builder.draw_line(f"Header {page_number}", text_size=8)

    builder = make_builder(doc, on_add_page=header)
    run(builder.add_paragraph("Body text"))

    assert doc.drawn_lines == ["Header 1", "Body text"]


def test_page_callback_error_propagates():
    """Test that callback errors reach the caller."""
    def broken(builder, page_number):
        raise RuntimeError("header failed")

    with pytest.raises(RuntimeError, match="header failed"):
        make_builder(on_add_page=broken)


def test_paragraph_is_wrapped_to_available_width():
    """Test paragraph wrapping against the available width."""
    doc = FakeDocument()
    builder = make_builder(doc, left_margin=25, right_margin=470)
    # 595 - (25 + 470) = 100 points = 20 characters at size 10
    run(builder.add_paragraph("The quick brown fox jumps over the lazy dog"))

    assert doc.drawn_lines == ["The quick brown fox", "jumps over the lazy", "dog"]
    for line in doc.drawn_lines:
        assert FakeFont().width_of_text_at_size(line, 10) <= 100


def test_paragraph_with_text_size():
    """Test that paragraph size affects both wrapping and advance."""
    doc = FakeDocument()
    builder = make_builder(doc, right_margin=470)
    # 100 points = 10 characters at size 20
    run(builder.add_paragraph("aaaa bbbb cccc", text_size=20))

    assert doc.drawn_lines == ["aaaa bbbb", "cccc"]
    assert [entry[3] for entry in doc.pages[0].drawn] == [20, 20]
    assert doc.pages[0].get_y() == 782 - 2 * 26


def test_paragraph_uses_default_size():
    """Test the configured default size."""
    doc = FakeDocument()
    builder = make_builder(doc, default_size=12)
    run(builder.add_paragraph("Hello"))

    assert doc.pages[0].drawn[0][3] == 12


def test_empty_paragraph_does_nothing():
    """Test that an empty paragraph draws nothing and keeps the cursor."""
    doc = FakeDocument()
    builder = make_builder(doc)
    y = builder.page.get_y()
    run(builder.add_paragraph(""))

    assert doc.pages[0].drawn == []
    assert builder.page.get_y() == y
    assert len(doc.pages) == 1


def test_empty_paragraph_at_bottom_does_not_add_page():
    """Test that an empty paragraph on a full page adds no page."""
    doc = FakeDocument()
    builder = make_builder(doc)
    for _ in range(54):
        run(builder.draw_line("x"))
    run(builder.add_paragraph(""))

    assert len(doc.pages) == 1


def test_overlong_word_is_drawn_whole():
    """Test that a word wider than the page is drawn on its own line."""
    doc = FakeDocument()
    builder = make_builder(doc)
    word = "x" * 200  # 1000 points wide
    run(builder.add_paragraph(f"a {word} b"))

    assert doc.drawn_lines == ["a", word, "b"]


def test_paragraph_flows_onto_next_page():
    """Test a paragraph that spans two pages."""
    doc = FakeDocument()
    numbers = []
    builder = make_builder(doc, on_add_page=lambda b, n: numbers.append(n))
    # One word per line: 60 lines
    text = " ".join("w" * 100 for _ in range(60))
    run(builder.add_paragraph(text))

    assert numbers == [1, 2]
    assert len(doc.pages[0].drawn) == 54
    assert len(doc.pages[1].drawn) == 6


def test_failure_while_adding_page_keeps_drawn_lines():
    """Test that lines drawn before a page failure are kept."""
    doc = FailingDocument(max_pages=1)
    builder = make_builder(doc)
    text = " ".join("w" * 100 for _ in range(60))

    with pytest.raises(OSError, match="out of paper"):
        run(builder.add_paragraph(text))
    assert len(doc.pages[0].drawn) == 54


def test_break_text_into_lines_uses_font_and_width():
    """Test the builder's wrap helper with an explicit width."""
    builder = make_builder()
    assert builder.break_text_into_lines("aa bb cc", 10, width=25) == ["aa bb", "cc"]
    assert builder.break_text_into_lines("", 10) == []


def test_break_text_into_lines_with_break_characters():
    """Test the wrap helper with custom break characters."""
    builder = make_builder()
    lines = builder.break_text_into_lines("aa-bb cc", 10, width=15, break_characters=("-", " "))
    assert lines == ["aa", "bb", "cc"]


def test_configured_word_breaks():
    """Test word_breaks from the layout config."""
    doc = FakeDocument()
    builder = make_builder(doc, word_breaks=("/",), right_margin=545)
    # 595 - (25 + 545) = 25 points = 5 characters
    run(builder.add_paragraph("usr/local/bin"))

    assert doc.drawn_lines == ["usr", "local", "bin"]


def test_config_and_options_are_merged():
    """Test that keyword options override a given config."""
    doc = FakeDocument()
    config = LayoutConfig(top_margin=80, page_size=PAGE_SIZE)
    builder = run(PdfBuilder.create(doc, config, left_margin=40))

    assert builder.config.top_margin == 80
    assert builder.config.left_margin == 40
    assert builder.page.get_y() == 842 - 80
    assert builder.page.get_x() == 40


def test_initialize_is_idempotent():
    """Test that a second initialize() adds no page."""
    doc = FakeDocument()
    builder = make_builder(doc)
    run(builder.initialize())

    assert len(doc.pages) == 1
    assert builder.page_number == 1


def test_uninitialized_builder_refuses_to_draw():
    """Test that drawing before initialize() raises."""
    doc = FakeDocument()
    builder = PdfBuilder(doc)

    assert builder.state is BuilderState.UNINITIALIZED
    assert builder.page is None
    assert builder.page_number == 0
    with pytest.raises(BuilderNotInitializedError):
        builder.get_width()
    with pytest.raises(BuilderNotInitializedError):
        run(builder.draw_line("text"))
    with pytest.raises(BuilderNotInitializedError):
        run(builder.add_paragraph("text"))
    with pytest.raises(BuilderNotInitializedError):
        run(builder.add_page())
    assert doc.pages == []


def test_initialize_after_construction():
    """Test two-step construction."""
    doc = FakeDocument()
    builder = PdfBuilder(doc, page_size=PAGE_SIZE)
    run(builder.initialize())
    run(builder.add_paragraph("ready"))

    assert doc.drawn_lines == ["ready"]


def test_invalid_arguments_are_rejected_before_drawing():
    """Test that wrong argument types raise before anything is drawn."""
    doc = FakeDocument()
    builder = make_builder(doc)
    y = builder.page.get_y()

    with pytest.raises(TypeError):
        run(builder.draw_line(123))
    with pytest.raises(TypeError):
        run(builder.draw_line("text", text_size="big"))
    with pytest.raises(TypeError):
        run(builder.add_paragraph(["not", "text"]))
    with pytest.raises(TypeError):
        run(builder.add_paragraph("text", text_size=True))

    assert doc.pages[0].drawn == []
    assert builder.page.get_y() == y


def test_non_positive_text_size_is_rejected_before_drawing():
    """Test that zero or negative text sizes leave the cursor where it was."""
    doc = FakeDocument()
    builder = make_builder(doc)
    y = builder.page.get_y()

    with pytest.raises(ValueError):
        run(builder.draw_line("x", text_size=-10))
    with pytest.raises(ValueError):
        run(builder.draw_line("x", text_size=0))
    with pytest.raises(ValueError):
        run(builder.add_blank_line(text_size=-1))
    with pytest.raises(ValueError):
        run(builder.add_paragraph("a b", text_size=0))

    assert doc.pages[0].drawn == []
    assert builder.page.get_y() == y
    assert len(doc.pages) == 1


def test_break_text_into_lines_requires_a_positive_size():
    """Test that the wrap helper needs a real text size."""
    builder = make_builder()

    with pytest.raises(TypeError):
        builder.break_text_into_lines("a b", None)
    with pytest.raises(TypeError):
        builder.break_text_into_lines("a b", "10")
    with pytest.raises(ValueError):
        builder.break_text_into_lines("a b", 0)
    with pytest.raises(ValueError):
        builder.break_text_into_lines("a b", -2.5)


def test_invalid_document_or_config():
    """Test constructor argument checks."""
    with pytest.raises(TypeError):
        PdfBuilder(object())
    with pytest.raises(TypeError):
        PdfBuilder(FakeDocument(), config={"top_margin": 10})
    with pytest.raises(ValueError):
        PdfBuilder(FakeDocument(), top_margin=-1)
