"""Morphs: a control panel slot plus one of eleven tagged offset payloads.

Morph record layout:
    name, name_en:  text
    panel:          uint8 (ControlPanel)
    type:           uint8 tag 0x00..0x0A
    offsets:        uint32 count + count * offset record of the tag's shape
"""

import enum
from dataclasses import dataclass, field
from typing import ClassVar, List, Tuple

from .pmx_constants import (
    MORPH_GROUP, MORPH_VERTEX, MORPH_BONE, MORPH_UV,
    MORPH_UV1, MORPH_UV2, MORPH_UV3, MORPH_UV4,
    MORPH_MATERIAL, MORPH_FLIP, MORPH_IMPULSE,
)
from .pmx_errors import ControlPanelError, MorphTypeError
from .pmx_stream import (
    read_bool, read_enum, read_f32, read_list, read_text, read_u8,
    read_vec3, read_vec4,
    write_bool, write_f32, write_list, write_text, write_u8,
    write_vec3, write_vec4,
)


Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]


class ControlPanel(enum.IntEnum):
    SYSTEM = 0
    EYEBROW = 1     # bottom left
    EYE = 2         # top left
    MOUTH = 3       # top right
    OTHER = 4       # bottom right


# Offset records, one fixed shape per morph type

@dataclass
class GroupOffset:
    morph_index: int
    factor: float

    @classmethod
    def read(cls, header, stream):
        return cls(header.read_morph_index(stream), read_f32(stream))

    def write(self, header, stream):
        header.write_morph_index(stream, self.morph_index)
        write_f32(stream, self.factor)


@dataclass
class FlipOffset(GroupOffset):
    """Same shape as GroupOffset; only the morph type differs."""


@dataclass
class VertexOffset:
    vertex_index: int
    offset: Vec3

    @classmethod
    def read(cls, header, stream):
        return cls(header.read_vertex_index(stream), read_vec3(stream))

    def write(self, header, stream):
        header.write_vertex_index(stream, self.vertex_index)
        write_vec3(stream, self.offset)


@dataclass
class BoneOffset:
    bone_index: int
    translation: Vec3
    rotation: Vec4      # quaternion x, y, z, w

    @classmethod
    def read(cls, header, stream):
        return cls(header.read_bone_index(stream), read_vec3(stream), read_vec4(stream))

    def write(self, header, stream):
        header.write_bone_index(stream, self.bone_index)
        write_vec3(stream, self.translation)
        write_vec4(stream, self.rotation)


@dataclass
class UVOffset:
    vertex_index: int
    offset: Vec4

    @classmethod
    def read(cls, header, stream):
        return cls(header.read_vertex_index(stream), read_vec4(stream))

    def write(self, header, stream):
        header.write_vertex_index(stream, self.vertex_index)
        write_vec4(stream, self.offset)


@dataclass
class MaterialOffset:
    """Per-material color and texture blend.

    ``formula`` is 0 for multiply, 1 for add. A material index of -1
    addresses every material.
    """
    material_index: int
    formula: int = 0
    diffuse: Vec4 = (0.0, 0.0, 0.0, 0.0)
    specular: Vec3 = (0.0, 0.0, 0.0)
    specular_factor: float = 0.0
    ambient: Vec3 = (0.0, 0.0, 0.0)
    edge_color: Vec4 = (0.0, 0.0, 0.0, 0.0)
    edge_size: float = 0.0
    texture_factor: Vec4 = (0.0, 0.0, 0.0, 0.0)
    sphere_texture_factor: Vec4 = (0.0, 0.0, 0.0, 0.0)
    toon_texture_factor: Vec4 = (0.0, 0.0, 0.0, 0.0)

    @classmethod
    def read(cls, header, stream):
        return cls(
            material_index=header.read_material_index(stream),
            formula=read_u8(stream),
            diffuse=read_vec4(stream),
            specular=read_vec3(stream),
            specular_factor=read_f32(stream),
            ambient=read_vec3(stream),
            edge_color=read_vec4(stream),
            edge_size=read_f32(stream),
            texture_factor=read_vec4(stream),
            sphere_texture_factor=read_vec4(stream),
            toon_texture_factor=read_vec4(stream),
        )

    def write(self, header, stream):
        header.write_material_index(stream, self.material_index)
        write_u8(stream, self.formula)
        write_vec4(stream, self.diffuse)
        write_vec3(stream, self.specular)
        write_f32(stream, self.specular_factor)
        write_vec3(stream, self.ambient)
        write_vec4(stream, self.edge_color)
        write_f32(stream, self.edge_size)
        write_vec4(stream, self.texture_factor)
        write_vec4(stream, self.sphere_texture_factor)
        write_vec4(stream, self.toon_texture_factor)


@dataclass
class ImpulseOffset:
    rigid_body_index: int
    local: bool
    velocity: Vec3
    torque: Vec3

    @classmethod
    def read(cls, header, stream):
        return cls(
            header.read_rigid_body_index(stream),
            read_bool(stream),
            read_vec3(stream),
            read_vec3(stream),
        )

    def write(self, header, stream):
        header.write_rigid_body_index(stream, self.rigid_body_index)
        write_bool(stream, self.local)
        write_vec3(stream, self.velocity)
        write_vec3(stream, self.torque)


# Morph payloads: tag byte + counted list of offsets

class MorphData:
    """Base of the eleven morph payload kinds.

    Each subclass pairs a wire TAG with its OFFSET record class.
    """

    TAG: ClassVar[int] = -1
    OFFSET: ClassVar[type]

    offsets: list

    @classmethod
    def read(cls, header, stream):
        tag = read_u8(stream)
        kind = MORPH_TYPES.get(tag)
        if kind is None:
            raise MorphTypeError(tag)
        offset_cls = kind.OFFSET
        return kind(read_list(stream, lambda s: offset_cls.read(header, s)))

    def write(self, header, stream):
        write_u8(stream, self.TAG)
        write_list(stream, self.offsets, lambda s, o: o.write(header, s))


@dataclass
class GroupMorph(MorphData):
    TAG: ClassVar[int] = MORPH_GROUP
    OFFSET: ClassVar[type] = GroupOffset
    offsets: List[GroupOffset] = field(default_factory=list)


@dataclass
class VertexMorph(MorphData):
    TAG: ClassVar[int] = MORPH_VERTEX
    OFFSET: ClassVar[type] = VertexOffset
    offsets: List[VertexOffset] = field(default_factory=list)


@dataclass
class BoneMorph(MorphData):
    TAG: ClassVar[int] = MORPH_BONE
    OFFSET: ClassVar[type] = BoneOffset
    offsets: List[BoneOffset] = field(default_factory=list)


@dataclass
class UVMorph(MorphData):
    TAG: ClassVar[int] = MORPH_UV
    OFFSET: ClassVar[type] = UVOffset
    offsets: List[UVOffset] = field(default_factory=list)


@dataclass
class UV1Morph(UVMorph):
    TAG: ClassVar[int] = MORPH_UV1


@dataclass
class UV2Morph(UVMorph):
    TAG: ClassVar[int] = MORPH_UV2


@dataclass
class UV3Morph(UVMorph):
    TAG: ClassVar[int] = MORPH_UV3


@dataclass
class UV4Morph(UVMorph):
    TAG: ClassVar[int] = MORPH_UV4


@dataclass
class MaterialMorph(MorphData):
    TAG: ClassVar[int] = MORPH_MATERIAL
    OFFSET: ClassVar[type] = MaterialOffset
    offsets: List[MaterialOffset] = field(default_factory=list)


@dataclass
class FlipMorph(MorphData):
    TAG: ClassVar[int] = MORPH_FLIP
    OFFSET: ClassVar[type] = FlipOffset
    offsets: List[FlipOffset] = field(default_factory=list)


@dataclass
class ImpulseMorph(MorphData):
    TAG: ClassVar[int] = MORPH_IMPULSE
    OFFSET: ClassVar[type] = ImpulseOffset
    offsets: List[ImpulseOffset] = field(default_factory=list)


MORPH_TYPES = {
    cls.TAG: cls for cls in (
        GroupMorph, VertexMorph, BoneMorph,
        UVMorph, UV1Morph, UV2Morph, UV3Morph, UV4Morph,
        MaterialMorph, FlipMorph, ImpulseMorph,
    )
}


@dataclass
class Morph:
    name: str = ""
    name_en: str = ""
    panel: ControlPanel = ControlPanel.OTHER
    data: MorphData = field(default_factory=VertexMorph)

    @classmethod
    def read(cls, header, stream):
        enc = header.encoding
        return cls(
            name=read_text(stream, enc),
            name_en=read_text(stream, enc),
            panel=read_enum(stream, ControlPanel, ControlPanelError),
            data=MorphData.read(header, stream),
        )

    def write(self, header, stream):
        enc = header.encoding
        write_text(stream, self.name, enc)
        write_text(stream, self.name_en, enc)
        write_u8(stream, self.panel)
        self.data.write(header, stream)


def read_morphs(header, stream):
    return read_list(stream, lambda s: Morph.read(header, s))


def write_morphs(header, stream, morphs):
    write_list(stream, morphs, lambda s, m: m.write(header, s))
