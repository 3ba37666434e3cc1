"""Layout configuration for the page builder.

A LayoutConfig holds everything the builder needs to know about page
geometry and text defaults. It is immutable; use replace() to derive a
modified copy.
"""

import dataclasses
from dataclasses import dataclass, field
from numbers import Real
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Optional, Sequence, Tuple, Union

from .constants import LayoutConstants
from .document import Font

if TYPE_CHECKING:
    from .builder import PdfBuilder

PageCallback = Callable[['PdfBuilder', int], Union[None, Awaitable[None]]]

# Fields that can be stored as plain numbers in settings files
NUMERIC_FIELDS = (
    "default_size",
    "top_margin",
    "left_margin",
    "right_margin",
    "bottom_margin",
    "inter_line",
)


@dataclass(frozen=True)
class LayoutConfig:
    """Page layout settings.

    Attributes:
        default_size: Text size used when none is given, in points.
        top_margin: Space above the first line of a page.
        left_margin: Horizontal start of every line.
        right_margin: Space kept free at the right edge.
        bottom_margin: Lowest y position a line may reach.
        inter_line: Extra space added below every line.
        font: Font to use; a standard font is loaded when None.
        on_add_page: Called as on_add_page(builder, page_number) after each
            new page, including the first. May return an awaitable.
        page_size: (width, height) of new pages in points.
        word_breaks: Break characters; the document's default when None.
    """
    default_size: float = LayoutConstants.DEFAULT_TEXT_SIZE
    top_margin: float = LayoutConstants.TOP_MARGIN
    left_margin: float = LayoutConstants.LEFT_MARGIN
    right_margin: float = LayoutConstants.RIGHT_MARGIN
    bottom_margin: float = LayoutConstants.BOTTOM_MARGIN
    inter_line: float = LayoutConstants.INTER_LINE
    font: Optional[Font] = None
    on_add_page: Optional[PageCallback] = field(default=None, compare=False)
    page_size: Tuple[float, float] = LayoutConstants.DEFAULT_PAGE_SIZE
    word_breaks: Optional[Sequence[str]] = None

    def __post_init__(self):
        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise TypeError(f"{name} must be a number, not {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name} must not be negative: {value}")
        if self.default_size <= 0:
            raise ValueError(f"default_size must be positive: {self.default_size}")
        if self.font is not None and not isinstance(self.font, Font):
            raise TypeError(f"font must be a Font, not {type(self.font).__name__}")
        if self.on_add_page is not None and not callable(self.on_add_page):
            raise TypeError("on_add_page must be callable")
        if len(self.page_size) != 2 or any(dim <= 0 for dim in self.page_size):
            raise ValueError(f"page_size must be (width, height) with positive values: "
                             f"{self.page_size}")
        if self.top_margin + self.bottom_margin >= self.page_size[1]:
            raise ValueError("top_margin + bottom_margin leave no room on the page")
        if self.word_breaks is not None:
            # Freeze so the config cannot change behind the builder's back
            object.__setattr__(self, "word_breaks", tuple(self.word_breaks))

    def replace(self, **changes: Any) -> 'LayoutConfig':
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, float]:
        """Return the numeric settings as a plain dict."""
        return {name: getattr(self, name) for name in NUMERIC_FIELDS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **overrides: Any) -> 'LayoutConfig':
        """Create a config from a settings dict.

        Unknown keys are ignored. Keyword overrides take precedence over
        values from data.
        """
        values = {name: data[name] for name in NUMERIC_FIELDS if name in data}
        values.update(overrides)
        return cls(**values)
