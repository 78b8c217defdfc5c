"""Texture path list, materials and toon texture references."""

import enum
from dataclasses import dataclass, field
from typing import ClassVar, List, Tuple

from .pmx_constants import NO_INDEX, TOON_TEXTURE_INDEX, TOON_COMMON_INDEX
from .pmx_errors import MixModeError, ToonTypeError
from .pmx_stream import (
    read_enum, read_f32, read_i32, read_list, read_text, read_u8,
    read_vec3, read_vec4,
    write_f32, write_i32, write_list, write_text, write_u8,
    write_vec3, write_vec4,
)


def read_textures(header, stream):
    """Read the texture section: a counted list of texture path strings."""
    return read_list(stream, lambda s: read_text(s, header.encoding))


def write_textures(header, stream, textures):
    write_list(stream, textures, lambda s, path: write_text(s, path, header.encoding))


class MixMode(enum.IntEnum):
    """How the sphere (environment) texture combines with the base texture."""
    DISABLED = 0
    MULTIPLY = 1
    ADD = 2
    SUB_TEXTURE = 3


class ToonTexture:
    """Toon reference: either a texture index or one of the 10 shared toons."""

    TAG: ClassVar[int] = -1

    @classmethod
    def read(cls, header, stream):
        tag = read_u8(stream)
        if tag == TOON_TEXTURE_INDEX:
            return TextureToon(header.read_texture_index(stream))
        if tag == TOON_COMMON_INDEX:
            return CommonToon(read_u8(stream))
        raise ToonTypeError(tag)

    def write(self, header, stream):
        raise NotImplementedError


@dataclass
class TextureToon(ToonTexture):
    TAG: ClassVar[int] = TOON_TEXTURE_INDEX

    texture_index: int = NO_INDEX

    def write(self, header, stream):
        write_u8(stream, self.TAG)
        header.write_texture_index(stream, self.texture_index)


@dataclass
class CommonToon(ToonTexture):
    """Index into the common toon palette (toon01.bmp .. toon10.bmp)."""
    TAG: ClassVar[int] = TOON_COMMON_INDEX

    index: int = 0

    def write(self, header, stream):
        write_u8(stream, self.TAG)
        write_u8(stream, self.index)


@dataclass
class Material:
    name: str = ""
    name_en: str = ""
    diffuse: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    specular: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    ambient: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    flags: int = 0                  # MATERIAL_* bits from pmx_constants
    edge_color: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    edge_size: float = 1.0
    texture_index: int = NO_INDEX
    sphere_texture_index: int = NO_INDEX
    sphere_mode: MixMode = MixMode.DISABLED
    toon: ToonTexture = field(default_factory=CommonToon)
    memo: str = ""
    surface_count: int = 0          # number of face indices drawn with this material

    @classmethod
    def read(cls, header, stream):
        enc = header.encoding
        return cls(
            name=read_text(stream, enc),
            name_en=read_text(stream, enc),
            diffuse=read_vec4(stream),
            specular=read_vec4(stream),
            ambient=read_vec3(stream),
            flags=read_u8(stream),
            edge_color=read_vec4(stream),
            edge_size=read_f32(stream),
            texture_index=header.read_texture_index(stream),
            sphere_texture_index=header.read_texture_index(stream),
            sphere_mode=read_enum(stream, MixMode, MixModeError),
            toon=ToonTexture.read(header, stream),
            memo=read_text(stream, enc),
            surface_count=read_i32(stream),
        )

    def write(self, header, stream):
        enc = header.encoding
        write_text(stream, self.name, enc)
        write_text(stream, self.name_en, enc)
        write_vec4(stream, self.diffuse)
        write_vec4(stream, self.specular)
        write_vec3(stream, self.ambient)
        write_u8(stream, self.flags)
        write_vec4(stream, self.edge_color)
        write_f32(stream, self.edge_size)
        header.write_texture_index(stream, self.texture_index)
        header.write_texture_index(stream, self.sphere_texture_index)
        write_u8(stream, self.sphere_mode)
        self.toon.write(header, stream)
        write_text(stream, self.memo, enc)
        write_i32(stream, self.surface_count)


def read_materials(header, stream):
    return read_list(stream, lambda s: Material.read(header, s))


def write_materials(header, stream, materials):
    write_list(stream, materials, lambda s, m: m.write(header, s))
