"""PMX file header parser and writer, and the variable-width index codec."""

import enum
import struct

from .pmx_constants import (
    PMX_MAGIC, GLOBAL_DATA_MIN_SIZE,
    G_ENCODING, G_ADDITIONAL_VEC4,
    G_VERTEX_INDEX_SIZE, G_TEXTURE_INDEX_SIZE, G_MATERIAL_INDEX_SIZE,
    G_BONE_INDEX_SIZE, G_MORPH_INDEX_SIZE, G_RIGID_BODY_INDEX_SIZE,
    UNSIGNED_BIT8_MAX_COUNT, UNSIGNED_BIT16_MAX_COUNT,
    SIGNED_BIT8_MAX_COUNT, SIGNED_BIT16_MAX_COUNT,
    SOFT_BODY_MIN_VERSION, NO_INDEX,
)
from .pmx_errors import (
    MagicError, GlobalDataError, HeaderError,
    InvalidEncodingError, InvalidIndexSizeError, IndexRangeError,
)
from .pmx_stream import (
    Encoding, read_exact, read_f32, read_u8, write_f32, write_u8,
)


_INDEX_FORMATS = {1: struct.Struct("<B"), 2: struct.Struct("<H"), 4: struct.Struct("<I")}


class IndexSize(enum.IntEnum):
    """Byte width of one index kind, as declared in the header.

    Every index is stored zero-extended. For texture, material, bone, morph
    and rigid body indices the all-ones pattern of the width is reserved for
    NO_INDEX (-1), the "no reference" value used by parent bones, textures
    and so on. Vertex indices have no sentinel and may use the full range.

    Vertex index widths are derived with the narrower signed boundaries
    (``from_count(count, signed=True)``) so files stay readable by tools
    that sign-extend them.
    """

    BIT8 = 1
    BIT16 = 2
    BIT32 = 4

    @classmethod
    def from_count(cls, count, signed=False):
        """Narrowest width able to address every element of a ``count``-long list."""
        if signed:
            if count <= SIGNED_BIT8_MAX_COUNT:
                return cls.BIT8
            if count <= SIGNED_BIT16_MAX_COUNT:
                return cls.BIT16
            return cls.BIT32
        if count <= UNSIGNED_BIT8_MAX_COUNT:
            return cls.BIT8
        if count <= UNSIGNED_BIT16_MAX_COUNT:
            return cls.BIT16
        return cls.BIT32

    @property
    def all_ones(self):
        return (1 << (8 * self.value)) - 1

    def read(self, stream, sentinel=True):
        fmt = _INDEX_FORMATS[self.value]
        value = fmt.unpack(read_exact(stream, fmt.size))[0]
        if sentinel and value == self.all_ones:
            return NO_INDEX
        return value

    def write(self, stream, value, sentinel=True):
        if sentinel:
            if value == NO_INDEX:
                value = self.all_ones
            elif not 0 <= value < self.all_ones:
                raise IndexRangeError(value, self.value)
        elif not 0 <= value <= self.all_ones:
            raise IndexRangeError(value, self.value)
        stream.write(_INDEX_FORMATS[self.value].pack(value))


def _encoding_from_byte(value):
    try:
        return Encoding(value)
    except ValueError:
        raise InvalidEncodingError(value) from None


def _index_size_from_byte(value):
    try:
        return IndexSize(value)
    except ValueError:
        raise InvalidIndexSizeError(value) from None


class PMXHeader:
    """Represents the PMX header: signature, version and global data block.

    The header is shared read-only by every record codec: the encoding drives
    every string, and the six index sizes drive every cross reference.
    """

    def __init__(self, version=2.0, encoding=Encoding.UTF16LE,
                 additional_vec4_count=0,
                 vertex_index_size=IndexSize.BIT8,
                 texture_index_size=IndexSize.BIT8,
                 material_index_size=IndexSize.BIT8,
                 bone_index_size=IndexSize.BIT8,
                 morph_index_size=IndexSize.BIT8,
                 rigid_body_index_size=IndexSize.BIT8,
                 extra_data=b""):
        self.version = version
        self.encoding = Encoding(encoding)
        self.additional_vec4_count = additional_vec4_count
        self.vertex_index_size = IndexSize(vertex_index_size)
        self.texture_index_size = IndexSize(texture_index_size)
        self.material_index_size = IndexSize(material_index_size)
        self.bone_index_size = IndexSize(bone_index_size)
        self.morph_index_size = IndexSize(morph_index_size)
        self.rigid_body_index_size = IndexSize(rigid_body_index_size)
        self.extra_data = bytes(extra_data)

    @property
    def has_soft_bodies(self):
        """True when the version carries the soft body section (2.1+)."""
        return self.version >= SOFT_BODY_MIN_VERSION

    # Per-kind index helpers, used by every record codec

    def read_vertex_index(self, stream):
        return self.vertex_index_size.read(stream, sentinel=False)

    def write_vertex_index(self, stream, value):
        self.vertex_index_size.write(stream, value, sentinel=False)

    def read_texture_index(self, stream):
        return self.texture_index_size.read(stream)

    def write_texture_index(self, stream, value):
        self.texture_index_size.write(stream, value)

    def read_material_index(self, stream):
        return self.material_index_size.read(stream)

    def write_material_index(self, stream, value):
        self.material_index_size.write(stream, value)

    def read_bone_index(self, stream):
        return self.bone_index_size.read(stream)

    def write_bone_index(self, stream, value):
        self.bone_index_size.write(stream, value)

    def read_morph_index(self, stream):
        return self.morph_index_size.read(stream)

    def write_morph_index(self, stream, value):
        self.morph_index_size.write(stream, value)

    def read_rigid_body_index(self, stream):
        return self.rigid_body_index_size.read(stream)

    def write_rigid_body_index(self, stream, value):
        self.rigid_body_index_size.write(stream, value)

    @classmethod
    def read(cls, stream):
        """Read and parse a PMX header from a binary stream.

        Raises:
            MagicError: if the first 4 bytes are not the PMX signature
            GlobalDataError: if the global data block is shorter than 8 bytes
            InvalidEncodingError / InvalidIndexSizeError: on bad enum bytes
        """
        magic = read_exact(stream, 4)
        if magic != PMX_MAGIC:
            raise MagicError(magic)

        version = read_f32(stream)
        global_length = read_u8(stream)
        if global_length < GLOBAL_DATA_MIN_SIZE:
            raise GlobalDataError(global_length)
        g = read_exact(stream, global_length)

        return cls(
            version=version,
            encoding=_encoding_from_byte(g[G_ENCODING]),
            additional_vec4_count=g[G_ADDITIONAL_VEC4],
            vertex_index_size=_index_size_from_byte(g[G_VERTEX_INDEX_SIZE]),
            texture_index_size=_index_size_from_byte(g[G_TEXTURE_INDEX_SIZE]),
            material_index_size=_index_size_from_byte(g[G_MATERIAL_INDEX_SIZE]),
            bone_index_size=_index_size_from_byte(g[G_BONE_INDEX_SIZE]),
            morph_index_size=_index_size_from_byte(g[G_MORPH_INDEX_SIZE]),
            rigid_body_index_size=_index_size_from_byte(g[G_RIGID_BODY_INDEX_SIZE]),
            extra_data=g[GLOBAL_DATA_MIN_SIZE:],
        )

    def write(self, stream):
        """Serialize the header: magic, version, global data block."""
        global_length = GLOBAL_DATA_MIN_SIZE + len(self.extra_data)
        if global_length > 0xFF:
            raise HeaderError(
                f"Header extra data too long: {len(self.extra_data)} bytes"
            )
        if not 0 <= self.additional_vec4_count <= 0xFF:
            raise HeaderError(
                f"Additional vec4 count out of range: {self.additional_vec4_count}"
            )
        stream.write(PMX_MAGIC)
        write_f32(stream, self.version)
        write_u8(stream, global_length)
        stream.write(bytes((
            self.encoding,
            self.additional_vec4_count,
            self.vertex_index_size,
            self.texture_index_size,
            self.material_index_size,
            self.bone_index_size,
            self.morph_index_size,
            self.rigid_body_index_size,
        )))
        stream.write(self.extra_data)

    @classmethod
    def from_model(cls, model, version=2.0, encoding=Encoding.UTF16LE):
        """Build the best-fit header for writing ``model``.

        Each index size is the narrowest width that covers its section's
        element count; vertex indices use the signed boundaries.
        """
        return cls(
            version=version,
            encoding=encoding,
            additional_vec4_count=len(model.vertices.additional_vec4s),
            vertex_index_size=IndexSize.from_count(len(model.vertices), signed=True),
            texture_index_size=IndexSize.from_count(len(model.textures)),
            material_index_size=IndexSize.from_count(len(model.materials)),
            bone_index_size=IndexSize.from_count(len(model.bones)),
            morph_index_size=IndexSize.from_count(len(model.morphs)),
            rigid_body_index_size=IndexSize.from_count(len(model.rigid_bodies)),
        )

    def _key(self):
        return (
            self.version, self.encoding, self.additional_vec4_count,
            self.vertex_index_size, self.texture_index_size,
            self.material_index_size, self.bone_index_size,
            self.morph_index_size, self.rigid_body_index_size,
            self.extra_data,
        )

    def __eq__(self, other):
        if not isinstance(other, PMXHeader):
            return NotImplemented
        return self._key() == other._key()

    def __repr__(self):
        return (
            f"PMXHeader(version={self.version:.1f}, encoding={self.encoding.name}, "
            f"additionalVec4={self.additional_vec4_count}, "
            f"vertex={int(self.vertex_index_size)}, texture={int(self.texture_index_size)}, "
            f"material={int(self.material_index_size)}, bone={int(self.bone_index_size)}, "
            f"morph={int(self.morph_index_size)}, rigidBody={int(self.rigid_body_index_size)}, "
            f"extra={len(self.extra_data)})"
        )
