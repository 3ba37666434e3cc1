"""Standard PDF fonts and their metrics.

The 14 standard PDF fonts are built into every PDF reader, so they are
referenced rather than embedded. Metrics come from reportlab's AFM tables.
"""

from dataclasses import dataclass
from enum import Enum

from reportlab.pdfbase import pdfmetrics

from .errors import FontLoadError


class StandardFonts(str, Enum):
    """Names of the 14 standard PDF fonts."""

    COURIER = "Courier"
    COURIER_BOLD = "Courier-Bold"
    COURIER_OBLIQUE = "Courier-Oblique"
    COURIER_BOLD_OBLIQUE = "Courier-BoldOblique"
    HELVETICA = "Helvetica"
    HELVETICA_BOLD = "Helvetica-Bold"
    HELVETICA_OBLIQUE = "Helvetica-Oblique"
    HELVETICA_BOLD_OBLIQUE = "Helvetica-BoldOblique"
    TIMES_ROMAN = "Times-Roman"
    TIMES_BOLD = "Times-Bold"
    TIMES_ITALIC = "Times-Italic"
    TIMES_BOLD_ITALIC = "Times-BoldItalic"
    SYMBOL = "Symbol"
    ZAPF_DINGBATS = "ZapfDingbats"


@dataclass(frozen=True)
class StandardFont:
    """A standard font with size-dependent metrics.

    Attributes:
        name: PDF name of the font, as registered with reportlab.
    """
    name: str

    @classmethod
    def load(cls, name: str) -> 'StandardFont':
        """Look up a standard font by name.

        Args:
            name: One of the StandardFonts names.

        Raises:
            FontLoadError: If the name is not a standard font.
        """
        try:
            font_name = StandardFonts(name).value
        except ValueError:
            raise FontLoadError(f"Unknown standard font: {name}") from None
        # Loads the AFM metrics on first use
        pdfmetrics.getFont(font_name)
        return cls(font_name)

    def height_at_size(self, size: float) -> float:
        """Height from descender to ascender at the given size."""
        ascent, descent = pdfmetrics.getAscentDescent(self.name, size)
        return ascent - descent

    def width_of_text_at_size(self, text: str, size: float) -> float:
        """Rendered width of text at the given size."""
        return pdfmetrics.stringWidth(text, self.name, size)
