"""Constants and defaults for the pageflow layout engine."""

from reportlab.lib.pagesizes import A4


class LayoutConstants:
    """Central default values for page layout."""

    # Text
    DEFAULT_TEXT_SIZE = 10  # Points
    INTER_LINE = 2  # Extra points between two lines

    # Margins in points
    TOP_MARGIN = 60
    LEFT_MARGIN = 25
    RIGHT_MARGIN = 25
    BOTTOM_MARGIN = 25

    # Page
    DEFAULT_PAGE_SIZE = A4  # (595.27..., 841.88...) points

    # Fallback font when no font is configured
    DEFAULT_FONT_NAME = "Times-Roman"

    # Line breaking
    DEFAULT_WORD_BREAKS = (" ",)
    # Characters that always end a line; "\r\n" is folded into "\n" first
    NEWLINE_CHARS = ("\n", "\r", "\f", "\v", "\x85", "\u2028", "\u2029")
