"""Binary `.storybook` codec.

Layout (big-endian, unsigned):

    title bytes, 0x00
    author bytes, 0x00
    page_count         u16
    per page:
        choice1, choice2   u16, u16
        image_len          u32, then zlib(image) when image_len > 0
        text_len           u32, then zlib(text) when text_len > 0

Every field is compressed on its own; there is no shared dictionary.
"""

from __future__ import annotations

import io
import logging
import struct
import zlib
from typing import BinaryIO

from storybook.domain.errors import (
    DecompressionError,
    FieldTooLargeError,
    MalformedFieldError,
    TruncatedStreamError,
)
from storybook.domain.models import Page, Story

logger = logging.getLogger(__name__)

STRING_TERMINATOR = b"\x00"
MAX_PAGE_COUNT = 0xFFFF
MAX_CHOICE_VALUE = 0xFFFF
MAX_FIELD_LENGTH = 0xFFFFFFFF
_READ_CHUNK_SIZE = 64 * 1024

_COUNT_STRUCT = struct.Struct(">H")
_CHOICES_STRUCT = struct.Struct(">HH")
_LENGTH_STRUCT = struct.Struct(">I")


def encode_story(story: Story) -> bytes:
    """Encode a story into storybook bytes."""
    if story.page_count > MAX_PAGE_COUNT:
        raise FieldTooLargeError(
            f"story has {story.page_count} pages; the format allows at most {MAX_PAGE_COUNT}"
        )
    chunks = [
        _encode_string(story.title, field_name="title"),
        _encode_string(story.author, field_name="author"),
        _COUNT_STRUCT.pack(story.page_count),
    ]
    for page_number, page in enumerate(story.pages, start=1):
        chunks.extend(_encode_page(page, page_number=page_number))
    payload = b"".join(chunks)
    logger.debug("storybook.encode pages=%s bytes=%s", story.page_count, len(payload))
    return payload


def write_story(story: Story, sink: BinaryIO) -> int:
    """Encode `story` and write it to `sink`; returns the number of bytes written.

    Nothing is written when encoding fails.
    """
    payload = encode_story(story)
    sink.write(payload)
    sink.flush()
    return len(payload)


def decode_story(data: bytes) -> Story:
    """Decode storybook bytes into a fresh story."""
    source = io.BytesIO(data)
    story = read_story(source)
    trailing = len(data) - source.tell()
    if trailing:
        logger.warning("storybook.decode trailing_bytes=%s ignored", trailing)
    return story


def read_story(source: BinaryIO) -> Story:
    """Read one storybook from a binary stream.

    Reads stop at the end of the last page; the stream is never consumed
    beyond it. A story is returned only when every field decodes.
    """
    reader = _StreamReader(source)
    title = reader.read_terminated_string("title")
    author = reader.read_terminated_string("author")
    (page_count,) = _COUNT_STRUCT.unpack(reader.read_exact(_COUNT_STRUCT.size, "page_count"))
    pages = [_decode_page(reader, page_number=number) for number in range(1, page_count + 1)]
    logger.debug("storybook.decode pages=%s bytes=%s", page_count, reader.consumed)
    return Story(title=title, author=author, pages=pages, current_page_index=0)


def _encode_string(value: str, *, field_name: str) -> bytes:
    raw = _encode_utf8(value, field_name)
    if STRING_TERMINATOR in raw:
        raise FieldTooLargeError(f"{field_name} must not contain a NUL byte")
    return raw + STRING_TERMINATOR


def _encode_utf8(value: str, field_name: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise FieldTooLargeError(f"{field_name} is not encodable as UTF-8") from exc


def _encode_page(page: Page, *, page_number: int) -> list[bytes]:
    for slot, choice in enumerate(page.choices, start=1):
        if not 0 <= choice <= MAX_CHOICE_VALUE:
            raise FieldTooLargeError(
                f"page {page_number} choice {slot} value {choice} does not fit in u16"
            )
    chunks = [_CHOICES_STRUCT.pack(page.choice1, page.choice2)]
    if page.image is None:
        chunks.append(_LENGTH_STRUCT.pack(0))
    else:
        chunks.extend(_encode_payload(page.image, field_name=f"page {page_number} image"))
    chunks.extend(
        _encode_payload(
            _encode_utf8(page.text, f"page {page_number} text"),
            field_name=f"page {page_number} text",
        )
    )
    return chunks


def _encode_payload(content: bytes, *, field_name: str) -> list[bytes]:
    compressed = zlib.compress(content)
    if len(compressed) > MAX_FIELD_LENGTH:
        raise FieldTooLargeError(f"{field_name} is too large to encode")
    return [_LENGTH_STRUCT.pack(len(compressed)), compressed]


def _decode_page(reader: _StreamReader, *, page_number: int) -> Page:
    choice1, choice2 = _CHOICES_STRUCT.unpack(
        reader.read_exact(_CHOICES_STRUCT.size, f"page {page_number} choices")
    )
    image = reader.read_compressed_field(f"page {page_number} image")
    text_bytes = reader.read_compressed_field(f"page {page_number} text")
    text = "" if text_bytes is None else _decode_utf8(text_bytes, f"page {page_number} text")
    return Page(text=text, image=image, choice1=choice1, choice2=choice2)


def _decode_utf8(raw: bytes, field_name: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedFieldError(f"{field_name} is not valid UTF-8") from exc


def _inflate(payload: bytes, field_name: str) -> bytes:
    inflater = zlib.decompressobj()
    try:
        content = inflater.decompress(payload) + inflater.flush()
    except zlib.error as exc:
        raise DecompressionError(f"failed to decompress {field_name}") from exc
    if not inflater.eof:
        raise DecompressionError(f"{field_name} compressed stream is incomplete")
    if inflater.unused_data:
        raise DecompressionError(f"{field_name} has data after the compressed stream")
    return content


class _StreamReader:
    """Bounds-checked reads over a binary stream."""

    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self.consumed = 0

    def read_exact(self, size: int, field_name: str) -> bytes:
        # Declared lengths come from untrusted input; read in bounded chunks.
        buffer = bytearray()
        while len(buffer) < size:
            chunk = self._source.read(min(size - len(buffer), _READ_CHUNK_SIZE))
            if not chunk:
                break
            buffer += chunk
        data = bytes(buffer)
        self.consumed += len(data)
        if len(data) != size:
            raise TruncatedStreamError(
                f"{field_name}: expected {size} bytes, stream ended after {len(data)}"
            )
        return data

    def read_terminated_string(self, field_name: str) -> str:
        buffer = bytearray()
        while True:
            byte = self._source.read(1)
            if not byte:
                raise MalformedFieldError(f"{field_name} is missing its NUL terminator")
            self.consumed += 1
            if byte == STRING_TERMINATOR:
                return _decode_utf8(bytes(buffer), field_name)
            buffer += byte

    def read_compressed_field(self, field_name: str) -> bytes | None:
        (length,) = _LENGTH_STRUCT.unpack(
            self.read_exact(_LENGTH_STRUCT.size, f"{field_name} length")
        )
        if length == 0:
            return None
        return _inflate(self.read_exact(length, field_name), field_name)
