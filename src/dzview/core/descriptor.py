"""Parser for DeepZoom (.dzi) image descriptors.

The descriptor grammar is fixed and order-sensitive::

    <?xml version="1.0" encoding="UTF-8"?>
    <Image xmlns="http://schemas.microsoft.com/deepzoom/2008"
           TileSize="256" Overlap="1" Format="jpg">
      <Size Width="4096" Height="2048"/>

Parsing stops after the ``Height`` attribute; whatever follows is ignored.
The first divergence from the grammar raises :class:`DescriptorParseError`
and no descriptor is produced.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import NoReturn

from dzview.core.types import ImageDescriptor

logger = logging.getLogger(__name__)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
DEEPZOOM_NAMESPACE = "http://schemas.microsoft.com/deepzoom/2008"

_WHITESPACE = frozenset(" \t\r\n")
_DIGITS = frozenset("0123456789")

END_OF_INPUT = "end of input"

#: Longest slice of input quoted in an error message
_FOUND_PREVIEW = 16


def _line_column(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 1-based (line, column) pair."""
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


@dataclass(frozen=True)
class ParseFailure:
    """Detached, comparable copy of a DescriptorParseError for keeping in state."""

    offset: int
    line: int
    column: int
    expected: str
    found: str

    def to_dict(self) -> dict:
        return asdict(self)


class DescriptorParseError(ValueError):
    """Raised when descriptor text does not match the DeepZoom grammar.

    Attributes:
        offset: Character offset of the first divergence
        line: 1-based line of the divergence
        column: 1-based column of the divergence
        expected: Description of what the grammar required at ``offset``
        found: The text found at ``offset`` (or "end of input")
    """

    def __init__(self, text: str, offset: int, expected: str, width: int = 1) -> None:
        self.offset = offset
        self.expected = expected
        if offset >= len(text):
            self.found = END_OF_INPUT
        else:
            self.found = repr(text[offset:offset + max(width, 1)])
        self.line, self.column = _line_column(text, offset)
        super().__init__(
            f"line {self.line}, column {self.column} (offset {offset}): "
            f"expected {expected}, found {self.found}"
        )

    @property
    def failure(self) -> ParseFailure:
        return ParseFailure(
            offset=self.offset,
            line=self.line,
            column=self.column,
            expected=self.expected,
            found=self.found,
        )

    def to_dict(self) -> dict:
        return self.failure.to_dict()


class _Reader:
    """Cursor over descriptor text. Every method either advances or raises."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def fail(self, expected: str, width: int = 1) -> NoReturn:
        raise DescriptorParseError(self.text, self.pos, expected, width)

    def spaces(self) -> None:
        text = self.text
        while self.pos < len(text) and text[self.pos] in _WHITESPACE:
            self.pos += 1

    def literal(self, token: str) -> None:
        if not self.text.startswith(token, self.pos):
            self.fail(repr(token), len(token))
        self.pos += len(token)

    def integer(self) -> int:
        text = self.text
        end = self.pos
        if end < len(text) and text[end] == "-":
            end += 1
        digits_start = end
        while end < len(text) and text[end] in _DIGITS:
            end += 1
        if end == digits_start:
            self.pos = digits_start
            self.fail("integer")
        try:
            value = int(text[self.pos:end])
        except ValueError:
            # Digit runs past sys.get_int_max_str_digits()
            self.pos = digits_start
            self.fail("integer", min(end - digits_start, _FOUND_PREVIEW))
        self.pos = end
        return value

    def alphanumeric(self) -> str:
        text = self.text
        start = self.pos
        while self.pos < len(text) and text[self.pos].isascii() and text[self.pos].isalnum():
            self.pos += 1
        if self.pos == start:
            self.fail("alphanumeric string")
        return text[start:self.pos]

    def int_attribute(self, name: str) -> tuple[int, int]:
        """Read ``name="<integer>"``, returning the value and its offset."""
        self.literal(f'{name}="')
        offset = self.pos
        value = self.integer()
        self.literal('"')
        return value, offset

    def str_attribute(self, name: str) -> str:
        self.literal(f'{name}="')
        value = self.alphanumeric()
        self.literal('"')
        return value


def _check_minimum(text: str, value: int, offset: int, minimum: int) -> None:
    if value < minimum:
        expected = "positive integer" if minimum > 0 else "non-negative integer"
        raise DescriptorParseError(text, offset, expected, len(str(value)))


def parse_descriptor(text: str) -> ImageDescriptor:
    """Parse DeepZoom descriptor text.

    Args:
        text: Raw descriptor body as returned by the server

    Returns:
        The parsed ImageDescriptor

    Raises:
        DescriptorParseError: At the first point where ``text`` diverges
            from the descriptor grammar, or when a numeric field is out of
            range.
    """
    reader = _Reader(text)

    reader.literal(XML_HEADER)
    reader.spaces()
    reader.literal("<Image")
    reader.spaces()
    reader.literal(f'xmlns="{DEEPZOOM_NAMESPACE}"')
    reader.spaces()
    tile_size, tile_size_at = reader.int_attribute("TileSize")
    reader.spaces()
    overlap, overlap_at = reader.int_attribute("Overlap")
    reader.spaces()
    fmt = reader.str_attribute("Format")
    reader.literal(">")
    reader.spaces()
    reader.literal("<Size")
    reader.spaces()
    width, width_at = reader.int_attribute("Width")
    reader.spaces()
    height, height_at = reader.int_attribute("Height")

    _check_minimum(text, tile_size, tile_size_at, 1)
    _check_minimum(text, overlap, overlap_at, 0)
    _check_minimum(text, width, width_at, 1)
    _check_minimum(text, height, height_at, 1)

    descriptor = ImageDescriptor(
        tile_size=tile_size,
        overlap=overlap,
        format=fmt,
        width=width,
        height=height,
    )
    logger.debug("Parsed descriptor: %s", descriptor)
    return descriptor


def descriptor_fields(descriptor: ImageDescriptor) -> list[tuple[str, str]]:
    """Descriptor attributes as display key/value pairs, in document order."""
    return [
        ("TileSize", str(descriptor.tile_size)),
        ("Overlap", str(descriptor.overlap)),
        ("Format", descriptor.format),
        ("Width", str(descriptor.width)),
        ("Height", str(descriptor.height)),
    ]
