"""Document, page and font capabilities used by the layout engine.

The builder only talks to the abstract classes below. ReportLabDocument and
ReportLabPage implement them on top of a reportlab canvas so that laid out
text ends up in a PDF.
"""

import io
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from reportlab.lib import pagesizes
from reportlab.pdfgen import canvas

from .constants import LayoutConstants
from .errors import PageflowError
from .fonts import StandardFont

logger = logging.getLogger(__name__)

PageSize = Tuple[float, float]


class PageSizes:
    """Page size presets in points (width, height)."""

    A3: PageSize = pagesizes.A3
    A4: PageSize = pagesizes.A4
    A5: PageSize = pagesizes.A5
    LETTER: PageSize = pagesizes.letter
    LEGAL: PageSize = pagesizes.legal


class Font(ABC):
    """Size-dependent font metrics."""

    @abstractmethod
    def height_at_size(self, size: float) -> float:
        """Return the line height of the font at the given size."""

    @abstractmethod
    def width_of_text_at_size(self, text: str, size: float) -> float:
        """Return the rendered width of text at the given size."""


# StandardFont already has the right methods
Font.register(StandardFont)


class Page(ABC):
    """A page with a drawing position.

    Coordinates are in points with the origin at the bottom left corner,
    so moving down decreases y.
    """

    @abstractmethod
    def get_width(self) -> float: ...

    @abstractmethod
    def get_height(self) -> float: ...

    @abstractmethod
    def get_x(self) -> float: ...

    @abstractmethod
    def get_y(self) -> float: ...

    @abstractmethod
    def move_to(self, x: float, y: float) -> None: ...

    @abstractmethod
    def move_down(self, delta: float) -> None: ...

    @abstractmethod
    def set_font(self, font: Font) -> None: ...

    @abstractmethod
    def draw_text(self, text: str, x: Optional[float] = None, size: Optional[float] = None,
                  line_height: Optional[float] = None) -> None:
        """Draw a single line of text at the current y position.

        Args:
            text: Text to draw.
            x: Horizontal position; defaults to the current x.
            size: Font size in points.
            line_height: Leading in points.
        """


class Document(ABC):
    """A document that pages can be appended to."""

    default_word_breaks: Sequence[str] = LayoutConstants.DEFAULT_WORD_BREAKS

    @abstractmethod
    def add_page(self, size: PageSize) -> Page:
        """Append a new page of the given size and return it."""

    @abstractmethod
    def embed_standard_font(self, name: str) -> Font:
        """Return one of the standard PDF fonts by name."""


class ReportLabPage(Page):
    """A page of a ReportLabDocument."""

    def __init__(self, document: 'ReportLabDocument', size: PageSize, page_number: int):
        self._document = document
        self.width, self.height = size
        self.page_number = page_number
        self.x = 0.0
        self.y = self.height
        self.font: Optional[StandardFont] = None
        self.font_size = LayoutConstants.DEFAULT_TEXT_SIZE

    def get_width(self) -> float:
        return self.width

    def get_height(self) -> float:
        return self.height

    def get_x(self) -> float:
        return self.x

    def get_y(self) -> float:
        return self.y

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def move_down(self, delta: float) -> None:
        self.y -= delta

    def set_font(self, font: Font) -> None:
        if not isinstance(font, StandardFont):
            raise TypeError(f"font must be StandardFont, not {type(font).__name__}")
        self.font = font

    def draw_text(self, text: str, x: Optional[float] = None, size: Optional[float] = None,
                  line_height: Optional[float] = None) -> None:
        if self.font is None:
            raise PageflowError("No font set on page")
        c = self._document.canvas_for(self)
        size = size if size is not None else self.font_size
        c.setFont(self.font.name, size, leading=line_height)
        c.drawString(x if x is not None else self.x, self.y, text)


class ReportLabDocument(Document):
    """Document that renders its pages to PDF with a reportlab canvas.

    reportlab writes pages sequentially, so only the most recently added
    page can be drawn on.
    """

    def __init__(self, title: Optional[str] = None, author: Optional[str] = None):
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=LayoutConstants.DEFAULT_PAGE_SIZE)
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)
        self.pages: List[ReportLabPage] = []
        self._pdf: Optional[bytes] = None

    def add_page(self, size: PageSize) -> ReportLabPage:
        if self._pdf is not None:
            raise PageflowError("Document has already been saved")
        if self.pages:
            self._canvas.showPage()
        self._canvas.setPageSize(size)
        page = ReportLabPage(self, size, len(self.pages) + 1)
        self.pages.append(page)
        logger.debug("Added page %d (%.2f x %.2f)", page.page_number, size[0], size[1])
        return page

    def embed_standard_font(self, name: str) -> StandardFont:
        return StandardFont.load(name)

    def canvas_for(self, page: ReportLabPage) -> canvas.Canvas:
        """Return the canvas if page is the page being written."""
        if self._pdf is not None or not self.pages or page is not self.pages[-1]:
            raise PageflowError(f"Page {page.page_number} is no longer writable")
        return self._canvas

    def get_page_count(self) -> int:
        return len(self.pages)

    def save(self) -> bytes:
        """Finish the document and return the PDF bytes.

        Calling save again returns the same bytes.
        """
        if self._pdf is None:
            if self.pages:
                # Emit the last page even when nothing was drawn on it
                self._canvas.showPage()
            self._canvas.save()
            self._pdf = self._buffer.getvalue()
        return self._pdf

    def save_to_file(self, filename: str) -> None:
        """Write the PDF to filename."""
        with open(filename, 'wb') as f:
            f.write(self.save())
