"""Greedy word wrapping of text against a width measurement function.

Text is first split at hard line breaks (newlines). Each hard line is then
wrapped at break characters: words are added to the current line as long as
the measured width of the line stays within the budget. The break character
at a split point is consumed. A single word that is wider than the budget
is put on its own line and left to overflow; it is never truncated.
"""

import re
from typing import Callable, Iterable, List, Tuple

from .constants import LayoutConstants

_HARD_BREAK_RE = re.compile(
    "\r\n|" + "|".join(re.escape(char) for char in LayoutConstants.NEWLINE_CHARS)
)


def _check_break_characters(break_characters: Iterable[str]) -> Tuple[str, ...]:
    """Validate break characters and return them as a tuple."""
    if isinstance(break_characters, str):
        # A plain string is treated as a set of characters
        break_characters = tuple(break_characters)
    chars = tuple(break_characters)
    for char in chars:
        if not isinstance(char, str):
            raise TypeError(f"break characters must be str, not {type(char).__name__}")
        if len(char) != 1:
            raise ValueError(f"break characters must be single characters: {char!r}")
        if char in LayoutConstants.NEWLINE_CHARS:
            raise ValueError(f"break characters must not include newlines: {char!r}")
    return chars


def _split_words(line: str, break_characters: Tuple[str, ...]) -> List[Tuple[str, str]]:
    """Split a hard line into (separator, word) pairs.

    The separator is the break character that precedes the word, or the
    empty string for the first word. Consecutive break characters yield
    empty words so that no character is lost.
    """
    words: List[Tuple[str, str]] = []
    separator = ""
    start = 0
    for i, char in enumerate(line):
        if char in break_characters:
            words.append((separator, line[start:i]))
            separator = char
            start = i + 1
    words.append((separator, line[start:]))
    return words


def _wrap_hard_line(line: str, break_characters: Tuple[str, ...], max_width: float,
                    compute_width: Callable[[str], float]) -> List[str]:
    words = _split_words(line, break_characters)
    lines: List[str] = []
    current = words[0][1]
    for separator, word in words[1:]:
        if lines and not current:
            # Separators right after a wrap point are consumed
            current = word
            continue
        candidate = current + separator + word
        if compute_width(candidate) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate

    if current or not lines:
        lines.append(current)
    return lines


def break_text_into_lines(text: str, break_characters: Iterable[str], max_width: float,
                          compute_width: Callable[[str], float]) -> List[str]:
    """Break text into lines no wider than max_width.

    Args:
        text: Text to break. Newline characters always end a line.
        break_characters: Characters at which a line may be split.
        max_width: Width budget for one line.
        compute_width: Returns the rendered width of a text fragment.

    Returns:
        List of lines. Empty text gives an empty list. An empty hard line
        (e.g. between two consecutive newlines) gives an empty string; a
        trailing newline adds no line.

    Raises:
        TypeError: If text or a break character is not a string.
        ValueError: If a break character is not a single non-newline character.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be str, not {type(text).__name__}")
    chars = _check_break_characters(break_characters)
    if not text:
        return []

    hard_lines = _HARD_BREAK_RE.split(text)
    if len(hard_lines) > 1 and not hard_lines[-1]:
        # A trailing newline ends the last line; it does not start a new one
        hard_lines.pop()

    lines: List[str] = []
    for hard_line in hard_lines:
        lines.extend(_wrap_hard_line(hard_line, chars, max_width, compute_width))
    return lines


def break_into_lines(text: str, text_size: float, width_budget: float,
                     break_characters: Iterable[str],
                     measure_width: Callable[[str, float], float]) -> List[str]:
    """Break text into lines for a given text size.

    Same as break_text_into_lines, with measure_width(fragment, size)
    called at text_size.
    """
    return break_text_into_lines(
        text,
        break_characters,
        width_budget,
        lambda fragment: measure_width(fragment, text_size),
    )
