"""Primitive and text codecs for PMX streams.

All values are little-endian. Readers take a binary stream with a ``read``
method, writers a stream with a ``write`` method; both work on files and on
``io.BytesIO`` alike.
"""

import enum
import struct

from .pmx_errors import (
    BoolValueError, FieldRangeError, TextEncodingError, UnexpectedEOFError,
)


_U8 = struct.Struct("<B")
_I8 = struct.Struct("<b")
_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_F32 = struct.Struct("<f")
_VEC2 = struct.Struct("<2f")
_VEC3 = struct.Struct("<3f")
_VEC4 = struct.Struct("<4f")


def read_exact(stream, size):
    """Read exactly ``size`` bytes or raise UnexpectedEOFError."""
    data = stream.read(size)
    if len(data) != size:
        raise UnexpectedEOFError(size, len(data))
    return data


def _read(stream, fmt):
    return fmt.unpack(read_exact(stream, fmt.size))


def read_u8(stream):
    return _read(stream, _U8)[0]


def read_i8(stream):
    return _read(stream, _I8)[0]


def read_u16(stream):
    return _read(stream, _U16)[0]


def read_i16(stream):
    return _read(stream, _I16)[0]


def read_u32(stream):
    return _read(stream, _U32)[0]


def read_i32(stream):
    return _read(stream, _I32)[0]


def read_f32(stream):
    return _read(stream, _F32)[0]


def read_vec2(stream):
    return _read(stream, _VEC2)


def read_vec3(stream):
    return _read(stream, _VEC3)


def read_vec4(stream):
    return _read(stream, _VEC4)


def read_bool(stream):
    """Read a one-byte boolean; only 0 and 1 are valid."""
    value = read_u8(stream)
    if value == 0:
        return False
    if value == 1:
        return True
    raise BoolValueError(value)


def read_list(stream, read_item):
    """Read a uint32 count followed by that many items.

    Args:
        stream: binary source
        read_item: callable taking the stream and returning one item

    Returns:
        list of items, exactly ``count`` long
    """
    count = read_u32(stream)
    return [read_item(stream) for _ in range(count)]


def _write(stream, fmt, *values):
    try:
        data = fmt.pack(*values)
    except struct.error as e:
        raise FieldRangeError(f"Cannot pack {values!r} as {fmt.format}: {e}") from e
    stream.write(data)


def write_u8(stream, value):
    _write(stream, _U8, value)


def write_i8(stream, value):
    _write(stream, _I8, value)


def write_u16(stream, value):
    _write(stream, _U16, value)


def write_i16(stream, value):
    _write(stream, _I16, value)


def write_u32(stream, value):
    _write(stream, _U32, value)


def write_i32(stream, value):
    _write(stream, _I32, value)


def write_f32(stream, value):
    _write(stream, _F32, value)


def write_vec2(stream, value):
    _write(stream, _VEC2, *value)


def write_vec3(stream, value):
    _write(stream, _VEC3, *value)


def write_vec4(stream, value):
    _write(stream, _VEC4, *value)


def write_bool(stream, value):
    _write(stream, _U8, 1 if value else 0)


def write_list(stream, items, write_item):
    """Write the current length of ``items`` as uint32, then every item."""
    write_u32(stream, len(items))
    for item in items:
        write_item(stream, item)


class Encoding(enum.IntEnum):
    """Text encoding selected by the header's first global data byte."""

    UTF16LE = 0
    UTF8 = 1

    @property
    def codec(self):
        return "utf-16-le" if self is Encoding.UTF16LE else "utf-8"


def read_text(stream, encoding):
    """Read a uint32 byte length followed by text in ``encoding``."""
    length = read_u32(stream)
    raw = read_exact(stream, length)
    try:
        return raw.decode(encoding.codec)
    except UnicodeDecodeError as e:
        raise TextEncodingError(
            f"Malformed {encoding.name} text ({length} bytes): {e.reason}"
        ) from e


def write_text(stream, text, encoding):
    """Write ``text`` as a uint32 byte length followed by the encoded bytes."""
    try:
        raw = text.encode(encoding.codec)
    except UnicodeEncodeError as e:
        raise TextEncodingError(
            f"Text cannot be encoded as {encoding.name}: {e.reason}"
        ) from e
    write_u32(stream, len(raw))
    stream.write(raw)


def read_enum(stream, enum_cls, error_cls, read_value=read_u8):
    """Read a value with ``read_value`` and convert it to ``enum_cls``.

    Raises ``error_cls(value)`` when the value is not a member.
    """
    value = read_value(stream)
    try:
        return enum_cls(value)
    except ValueError:
        raise error_cls(value) from None
