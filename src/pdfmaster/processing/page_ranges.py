"""Page specification parsing against a known page count."""

from __future__ import annotations

import re

from pdfmaster.exceptions import EmptyInputError, InvalidNumberError, InvalidRangeError, OutOfBoundsError
from pdfmaster.typing.models import PageIndexSet, PageRange

_INTEGER = re.compile(r"[0-9]+")
_RANGE_SEPARATOR = "-"
_TOKEN_SEPARATOR = ","


def _split_tokens(spec: str | None, *, minimum: int, maximum: int) -> list[str]:
    """Split a comma-separated spec into stripped, non-empty tokens.

    Args:
        spec (str | None): Raw user input.
        minimum (int): Lowest valid value, reported on errors.
        maximum (int): Highest valid value, reported on errors.

    Raises:
        EmptyInputError: If no token remains.

    Returns:
        list[str]: Tokens in input order.
    """
    tokens = [token.strip() for token in (spec or "").split(_TOKEN_SEPARATOR)]
    tokens = [token for token in tokens if token]
    if not tokens:
        raise EmptyInputError(minimum=minimum, maximum=maximum)
    return tokens


def _parse_integer(text: str, *, token: str, minimum: int, maximum: int) -> int:
    """Parse a bare non-negative integer.

    Raises:
        InvalidNumberError: If `text` is not made of ASCII digits only.

    Returns:
        int: Parsed value.
    """
    if not _INTEGER.fullmatch(text):
        raise InvalidNumberError(token=token, minimum=minimum, maximum=maximum)
    return int(text)


def _check_bounds(value: int, *, token: str, minimum: int, maximum: int) -> None:
    if value < minimum or value > maximum:
        raise OutOfBoundsError(token=token, value=value, minimum=minimum, maximum=maximum)


def _parse_range_token(token: str, *, total_pages: int) -> PageRange:
    """Parse `n` or `start-end` into a validated range.

    Args:
        token (str): Stripped token.
        total_pages (int): Document page count.

    Raises:
        InvalidRangeError: If start is greater than end.

    Returns:
        PageRange: Range within `1..total_pages`.
    """
    bounds = {"minimum": 1, "maximum": total_pages}
    if _RANGE_SEPARATOR in token:
        start_text, _, end_text = token.partition(_RANGE_SEPARATOR)
        start = _parse_integer(start_text.strip(), token=token, **bounds)
        end = _parse_integer(end_text.strip(), token=token, **bounds)
        if start > end:
            raise InvalidRangeError(token=token, start=start, end=end, **bounds)
    else:
        start = end = _parse_integer(token, token=token, **bounds)

    _check_bounds(start, token=token, **bounds)
    _check_bounds(end, token=token, **bounds)
    return PageRange(start=start, end=end)


def parse_page_list(spec: str | None, total_pages: int) -> PageIndexSet:
    """Resolve a page list such as `1,3,5-8` into a page set.

    Duplicates across tokens collapse silently.

    Args:
        spec (str | None): Raw page spec.
        total_pages (int): Document page count.

    Returns:
        PageIndexSet: Ascending, duplicate-free pages.
    """
    pages: set[int] = set()
    for token in _split_tokens(spec, minimum=1, maximum=total_pages):
        page_range = _parse_range_token(token, total_pages=total_pages)
        pages.update(range(page_range.start, page_range.end + 1))
    return PageIndexSet(total_pages=total_pages, pages=tuple(sorted(pages)))


def parse_boundaries(spec: str | None, total_pages: int) -> list[int]:
    """Resolve split boundaries such as `2,5`.

    Each boundary is a bare page number after which the document is split, so
    it must be strictly less than `total_pages`.

    Args:
        spec (str | None): Raw boundary spec.
        total_pages (int): Document page count.

    Returns:
        list[int]: Ascending, duplicate-free boundaries.
    """
    bounds = {"minimum": 1, "maximum": total_pages - 1}
    boundaries: set[int] = set()
    for token in _split_tokens(spec, **bounds):
        value = _parse_integer(token, token=token, **bounds)
        _check_bounds(value, token=token, **bounds)
        boundaries.add(value)
    return sorted(boundaries)


def parse_range_list(spec: str | None, total_pages: int) -> list[PageRange]:
    """Resolve ranges such as `1-3,5-8` for extraction.

    A single page `n` stands for `n-n`. Ranges keep the caller's order and may
    overlap.

    Args:
        spec (str | None): Raw range spec.
        total_pages (int): Document page count.

    Returns:
        list[PageRange]: Ranges in input order.
    """
    return [
        _parse_range_token(token, total_pages=total_pages)
        for token in _split_tokens(spec, minimum=1, maximum=total_pages)
    ]
