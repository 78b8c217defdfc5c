"""Vertex block, skin weight variants and the face index list.

Vertex section layout (per vertex, interleaved):
    position:   Vec3f
    normal:     Vec3f
    uv:         Vec2f
    additional: header.additional_vec4_count * Vec4f
    skin:       tag byte + variant payload (bone indices use bone index size)
    edge scale: float

In memory the block is columnar: one list per attribute.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Tuple

from .pmx_constants import SKIN_BDEF1, SKIN_BDEF2, SKIN_BDEF4, SKIN_SDEF, SKIN_QDEF
from .pmx_errors import SkinTypeError, VertexCountError
from .pmx_stream import (
    read_f32, read_u8, read_u32, read_vec2, read_vec3, read_vec4,
    write_f32, write_u8, write_u32, write_vec2, write_vec3, write_vec4,
)


Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]


class Skin:
    """Base class of the five vertex weighting schemes.

    Subclasses set TAG and implement _read_body / _write_body. Weights are
    stored as found; nothing is normalized or range checked.
    """

    TAG: ClassVar[int] = -1

    @classmethod
    def read(cls, header, stream):
        tag = read_u8(stream)
        variant = SKIN_TYPES.get(tag)
        if variant is None:
            raise SkinTypeError(tag)
        return variant._read_body(header, stream)

    def write(self, header, stream):
        write_u8(stream, self.TAG)
        self._write_body(header, stream)

    @classmethod
    def _read_body(cls, header, stream):
        raise NotImplementedError

    def _write_body(self, header, stream):
        raise NotImplementedError


@dataclass
class BDEF1(Skin):
    """Single bone at full weight."""
    TAG: ClassVar[int] = SKIN_BDEF1

    bone_index: int = 0

    @classmethod
    def _read_body(cls, header, stream):
        return cls(header.read_bone_index(stream))

    def _write_body(self, header, stream):
        header.write_bone_index(stream, self.bone_index)


@dataclass
class BDEF2(Skin):
    """Two bones; the second bone's weight is 1 - weight_1."""
    TAG: ClassVar[int] = SKIN_BDEF2

    bone_index_1: int = 0
    bone_index_2: int = 0
    weight_1: float = 1.0

    @property
    def weight_2(self):
        return 1.0 - self.weight_1

    @classmethod
    def _read_body(cls, header, stream):
        b1 = header.read_bone_index(stream)
        b2 = header.read_bone_index(stream)
        return cls(b1, b2, read_f32(stream))

    def _write_body(self, header, stream):
        header.write_bone_index(stream, self.bone_index_1)
        header.write_bone_index(stream, self.bone_index_2)
        write_f32(stream, self.weight_1)


@dataclass
class BDEF4(Skin):
    """Four bones with four independent weights (not guaranteed to sum to 1)."""
    TAG: ClassVar[int] = SKIN_BDEF4

    bone_indices: Tuple[int, int, int, int] = (0, 0, 0, 0)
    weights: Vec4 = (1.0, 0.0, 0.0, 0.0)

    @classmethod
    def _read_body(cls, header, stream):
        bones = tuple(header.read_bone_index(stream) for _ in range(4))
        return cls(bones, read_vec4(stream))

    def _write_body(self, header, stream):
        for bone in self.bone_indices:
            header.write_bone_index(stream, bone)
        write_vec4(stream, self.weights)


@dataclass
class SDEF(Skin):
    """Spherical deform: two bones plus the C, R0 and R1 correction vectors."""
    TAG: ClassVar[int] = SKIN_SDEF

    bone_index_1: int = 0
    bone_index_2: int = 0
    weight_1: float = 1.0
    c: Vec3 = (0.0, 0.0, 0.0)
    r0: Vec3 = (0.0, 0.0, 0.0)
    r1: Vec3 = (0.0, 0.0, 0.0)

    @classmethod
    def _read_body(cls, header, stream):
        b1 = header.read_bone_index(stream)
        b2 = header.read_bone_index(stream)
        weight = read_f32(stream)
        return cls(b1, b2, weight, read_vec3(stream), read_vec3(stream), read_vec3(stream))

    def _write_body(self, header, stream):
        header.write_bone_index(stream, self.bone_index_1)
        header.write_bone_index(stream, self.bone_index_2)
        write_f32(stream, self.weight_1)
        write_vec3(stream, self.c)
        write_vec3(stream, self.r0)
        write_vec3(stream, self.r1)


@dataclass
class QDEF(BDEF4):
    """Dual quaternion deform; same layout as BDEF4."""
    TAG: ClassVar[int] = SKIN_QDEF


SKIN_TYPES = {cls.TAG: cls for cls in (BDEF1, BDEF2, BDEF4, SDEF, QDEF)}


@dataclass
class Vertices:
    """Columnar vertex block.

    ``additional_vec4s`` holds one list per additional vec4 slot; its length
    is the header's additional_vec4_count.
    """

    positions: List[Vec3] = field(default_factory=list)
    normals: List[Vec3] = field(default_factory=list)
    uvs: List[Vec2] = field(default_factory=list)
    additional_vec4s: List[List[Vec4]] = field(default_factory=list)
    skins: List[Skin] = field(default_factory=list)
    edge_scales: List[float] = field(default_factory=list)

    def __len__(self):
        return len(self.positions)

    def append(self, position, normal, uv, skin, edge_scale=1.0, additional=()):
        """Append one vertex to every column."""
        additional = list(additional)
        if len(additional) != len(self.additional_vec4s):
            raise VertexCountError(
                f"Vertex has {len(additional)} additional vec4s, "
                f"block has {len(self.additional_vec4s)} slots"
            )
        self.positions.append(tuple(position))
        self.normals.append(tuple(normal))
        self.uvs.append(tuple(uv))
        for slot, value in zip(self.additional_vec4s, additional):
            slot.append(tuple(value))
        self.skins.append(skin)
        self.edge_scales.append(edge_scale)

    @classmethod
    def read(cls, header, stream):
        count = read_u32(stream)
        vertices = cls(additional_vec4s=[[] for _ in range(header.additional_vec4_count)])
        positions = vertices.positions
        normals = vertices.normals
        uvs = vertices.uvs
        slots = vertices.additional_vec4s
        skins = vertices.skins
        edges = vertices.edge_scales

        for _ in range(count):
            positions.append(read_vec3(stream))
            normals.append(read_vec3(stream))
            uvs.append(read_vec2(stream))
            for slot in slots:
                slot.append(read_vec4(stream))
            skins.append(Skin.read(header, stream))
            edges.append(read_f32(stream))

        return vertices

    def check_shape(self, header):
        """Raise VertexCountError unless every column matches the vertex count."""
        count = len(self.positions)
        if len(self.additional_vec4s) != header.additional_vec4_count:
            raise VertexCountError(
                f"Header declares {header.additional_vec4_count} additional vec4 slots, "
                f"vertices carry {len(self.additional_vec4s)}"
            )
        columns = {
            "normals": len(self.normals),
            "uvs": len(self.uvs),
            "skins": len(self.skins),
            "edge_scales": len(self.edge_scales),
        }
        for i, slot in enumerate(self.additional_vec4s):
            columns[f"additional_vec4s[{i}]"] = len(slot)
        for name, length in columns.items():
            if length != count:
                raise VertexCountError(
                    f"Vertex column {name} has {length} entries, expected {count}"
                )

    def write(self, header, stream):
        self.check_shape(header)
        write_u32(stream, len(self.positions))
        slots = self.additional_vec4s
        for i, position in enumerate(self.positions):
            write_vec3(stream, position)
            write_vec3(stream, self.normals[i])
            write_vec2(stream, self.uvs[i])
            for slot in slots:
                write_vec4(stream, slot[i])
            self.skins[i].write(header, stream)
            write_f32(stream, self.edge_scales[i])


def read_faces(header, stream):
    """Read the face section: a uint32 count of vertex indices, then the indices."""
    count = read_u32(stream)
    return [header.read_vertex_index(stream) for _ in range(count)]


def write_faces(header, stream, faces):
    write_u32(stream, len(faces))
    for index in faces:
        header.write_vertex_index(stream, index)
