"""Flow text onto pages, adding pages as vertical space runs out.

PdfBuilder keeps a cursor on the current page of a Document. Paragraphs are
wrapped to the width left between the cursor and the right margin, then drawn
line by line. When the next line would reach into the bottom margin a new
page is added first, and the on_add_page callback is run so that callers can
draw headers or page numbers.

Typical use::

    doc = ReportLabDocument()
    builder = await PdfBuilder.create(doc, top_margin=72)
    await builder.add_paragraph("Some long text ...")
    pdf_bytes = doc.save()
"""

import inspect
import logging
from enum import Enum
from numbers import Real
from typing import Any, Iterable, List, Optional

from .constants import LayoutConstants
from .document import Document, Font, Page
from .errors import BuilderNotInitializedError
from .layout_config import LayoutConfig
from .line_breaker import break_into_lines

logger = logging.getLogger(__name__)


class BuilderState(Enum):
    """Lifecycle of a PdfBuilder."""
    UNINITIALIZED = "uninitialized"  # No page yet
    READY = "ready"  # Cursor is on a page


def _check_optional_number(value: Any, name: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a number or None, not {type(value).__name__}")


def _check_optional_size(value: Any, name: str) -> None:
    _check_optional_number(value, name)
    if value is not None and value <= 0:
        raise ValueError(f"{name} must be positive: {value}")


def _check_size(value: Any, name: str) -> None:
    if value is None:
        raise TypeError(f"{name} is required")
    _check_optional_size(value, name)


def _check_text(text: Any) -> None:
    if not isinstance(text, str):
        raise TypeError(f"text must be str, not {type(text).__name__}")


class PdfBuilder:
    """Lay out lines and paragraphs on the pages of a document."""

    @classmethod
    async def create(cls, doc: Document, config: Optional[LayoutConfig] = None,
                     **options: Any) -> 'PdfBuilder':
        """Create a builder and start its first page.

        Args:
            doc: Document that receives the pages.
            config: Layout settings. Defaults to LayoutConfig().
            **options: LayoutConfig fields overriding those of config.

        Returns:
            A builder that is ready to draw.
        """
        builder = cls(doc, config, **options)
        await builder.initialize()
        return builder

    def __init__(self, doc: Document, config: Optional[LayoutConfig] = None, **options: Any):
        """Set up a builder without adding a page.

        initialize() must complete before anything is drawn; create() does
        both steps.

        Raises:
            TypeError: If doc is not a Document or config not a LayoutConfig.
        """
        if not isinstance(doc, Document):
            raise TypeError(f"doc must be a Document, not {type(doc).__name__}")
        if config is None:
            config = LayoutConfig(**options)
        elif not isinstance(config, LayoutConfig):
            raise TypeError(f"config must be a LayoutConfig, not {type(config).__name__}")
        elif options:
            config = config.replace(**options)

        self.doc = doc
        self._config = config
        self._font: Optional[Font] = config.font
        self._page: Optional[Page] = None
        self._page_number = 0
        self._state = BuilderState.UNINITIALIZED

    @property
    def config(self) -> LayoutConfig:
        return self._config

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is BuilderState.READY

    @property
    def page(self) -> Optional[Page]:
        """The page being written, or None before initialization."""
        return self._page

    @property
    def page_number(self) -> int:
        """1-based number of the current page; 0 before initialization."""
        return self._page_number

    @property
    def font(self) -> Optional[Font]:
        """The resolved font, or None if it has not been needed yet."""
        return self._font

    def _ensure_ready(self) -> Page:
        if self._state is not BuilderState.READY or self._page is None:
            raise BuilderNotInitializedError(
                "PdfBuilder has no page yet; await initialize() or use PdfBuilder.create()"
            )
        return self._page

    async def initialize(self) -> None:
        """Start the first page. Does nothing if already initialized."""
        if self._state is BuilderState.READY:
            return
        await self._add_page()

    def get_font(self) -> Font:
        """Return the configured font, loading the default font on first use."""
        if self._font is None:
            self._font = self.doc.embed_standard_font(LayoutConstants.DEFAULT_FONT_NAME)
            logger.debug("Using default font %s", LayoutConstants.DEFAULT_FONT_NAME)
        return self._font

    async def add_page(self) -> None:
        """Move the cursor to the top of a new page.

        Raises:
            BuilderNotInitializedError: If the builder was not initialized.
        """
        self._ensure_ready()
        await self._add_page()

    async def _add_page(self) -> None:
        page = self.doc.add_page(self._config.page_size)
        self._page_number += 1
        self._page = page
        page.set_font(self.get_font())
        page.move_to(self._config.left_margin, page.get_height() - self._config.top_margin)
        self._state = BuilderState.READY
        logger.debug("Started page %d", self._page_number)

        callback = self._config.on_add_page
        if callback is not None:
            result = callback(self, self._page_number)
            if inspect.isawaitable(result):
                await result

    def get_width(self) -> float:
        """Width left between the cursor and the right margin."""
        page = self._ensure_ready()
        return page.get_width() - (page.get_x() + self._config.right_margin)

    def break_text_into_lines(self, text: str, text_size: float, width: Optional[float] = None,
                              break_characters: Optional[Iterable[str]] = None) -> List[str]:
        """Wrap text with the builder's font.

        Args:
            text: Text to wrap.
            text_size: Size the text will be drawn at.
            width: Width budget; defaults to get_width().
            break_characters: Defaults to the configured word breaks, else
                the document's.

        Returns:
            The lines, empty for empty text.
        """
        _check_text(text)
        _check_size(text_size, "text_size")
        _check_optional_number(width, "width")
        if not text:
            return []
        if width is None:
            width = self.get_width()
        if break_characters is None:
            break_characters = self._config.word_breaks or self.doc.default_word_breaks
        font = self.get_font()
        return break_into_lines(text, text_size, width, break_characters,
                                font.width_of_text_at_size)

    async def draw_line(self, text: str, text_size: Optional[float] = None,
                        left_pos: Optional[float] = None) -> None:
        """Draw one line and move the cursor below it.

        A new page is started first if the line does not fit above the
        bottom margin. An empty line only takes up vertical space.

        Args:
            text: The line; it is not wrapped.
            text_size: Text size; defaults to the configured default size.
            left_pos: Horizontal position; defaults to the cursor's x.
        """
        _check_text(text)
        _check_optional_size(text_size, "text_size")
        _check_optional_number(left_pos, "left_pos")
        page = self._ensure_ready()

        size = text_size if text_size is not None else self._config.default_size
        text_height = self.get_font().height_at_size(size)
        if page.get_y() - (text_height + self._config.inter_line) < self._config.bottom_margin:
            await self._add_page()
            page = self._page
        page.move_down(text_height)
        if text:
            page.draw_text(text, x=left_pos, size=size, line_height=size)
        page.move_down(self._config.inter_line)

    async def add_blank_line(self, text_size: Optional[float] = None) -> None:
        """Leave the height of one empty line."""
        await self.draw_line("", text_size)

    async def add_paragraph(self, text: str, text_size: Optional[float] = None) -> None:
        """Wrap text to the available width and draw it.

        Lines drawn before a failure stay on the page.
        """
        _check_text(text)
        _check_optional_size(text_size, "text_size")
        self._ensure_ready()
        size = text_size if text_size is not None else self._config.default_size
        for line in self.break_text_into_lines(text, size):
            await self.draw_line(line, size)
