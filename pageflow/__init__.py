"""Pageflow - Flow text onto fixed-size pages."""

from .builder import BuilderState, PdfBuilder
from .document import Document, Font, Page, PageSizes, ReportLabDocument, ReportLabPage
from .errors import BuilderNotInitializedError, FontLoadError, PageflowError
from .fonts import StandardFont, StandardFonts
from .layout_config import LayoutConfig
from .line_breaker import break_into_lines, break_text_into_lines

__all__ = [
    'BuilderNotInitializedError',
    'BuilderState',
    'Document',
    'Font',
    'FontLoadError',
    'LayoutConfig',
    'Page',
    'PageSizes',
    'PageflowError',
    'PdfBuilder',
    'ReportLabDocument',
    'ReportLabPage',
    'StandardFont',
    'StandardFonts',
    'break_into_lines',
    'break_text_into_lines',
]
