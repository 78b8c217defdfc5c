"""Soft bodies (PMX 2.1 only).

The parameter block mirrors Bullet's btSoftBody::Config: twelve config
coefficients (kVCF, kDP, kDG, kLF, kPR, kVC, kDF, kMT, kCHR, kKHR, kSHR,
kAHR), six cluster coefficients, four solver iteration counts and three
material stiffness values.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import List

from .pmx_constants import NO_INDEX
from .pmx_errors import AeroModelError, SoftBodyShapeError
from .pmx_stream import (
    read_bool, read_enum, read_f32, read_i32, read_list, read_text, read_u8,
    read_u16, read_u32,
    write_bool, write_f32, write_i32, write_list, write_text, write_u8,
    write_u16, write_u32,
)


_log = logging.getLogger("pmx_format.soft_body")


class SoftBodyShape(enum.IntEnum):
    TRI_MESH = 0
    ROPE = 1


class AeroModel(enum.IntEnum):
    V_POINT = 0
    V_TWO_SIDED = 1
    V_ONE_SIDED = 2
    F_TWO_SIDED = 3
    F_ONE_SIDED = 4


# Flag byte bits
SOFT_BODY_B_LINK = 0x01
SOFT_BODY_CLUSTER = 0x02
SOFT_BODY_LINK_HYBRID = 0x04

_CONFIG_FIELDS = (
    "vcf", "dp", "dg", "lf", "pr", "vc", "df", "mt", "chr", "khr", "shr", "ahr",
)
_CLUSTER_FIELDS = (
    "srhr_cl", "skhr_cl", "sshr_cl", "sr_splt_cl", "sk_splt_cl", "ss_splt_cl",
)
_ITERATION_FIELDS = ("v_it", "p_it", "d_it", "c_it")
_MATERIAL_FIELDS = ("lst", "ast", "vst")


@dataclass
class SoftBodyAnchor:
    """Pins one soft body vertex to a rigid body."""
    rigid_body_index: int
    vertex_index: int
    near_mode: bool = False

    @classmethod
    def read(cls, header, stream):
        return cls(
            header.read_rigid_body_index(stream),
            header.read_vertex_index(stream),
            read_bool(stream),
        )

    def write(self, header, stream):
        header.write_rigid_body_index(stream, self.rigid_body_index)
        header.write_vertex_index(stream, self.vertex_index)
        write_bool(stream, self.near_mode)


@dataclass
class SoftBody:
    name: str = ""
    name_en: str = ""
    shape: SoftBodyShape = SoftBodyShape.TRI_MESH
    material_index: int = NO_INDEX
    group: int = 0
    non_collision_mask: int = 0
    flags: int = 0                  # SOFT_BODY_* bits
    b_link_distance: int = 0
    clusters: int = 0
    mass: float = 1.0
    collision_margin: float = 0.0
    aero_model: AeroModel = AeroModel.V_POINT

    vcf: float = 1.0
    dp: float = 0.0
    dg: float = 0.0
    lf: float = 0.0
    pr: float = 0.0
    vc: float = 0.0
    df: float = 0.25
    mt: float = 0.0
    chr: float = 1.0
    khr: float = 0.125
    shr: float = 1.0
    ahr: float = 0.75

    srhr_cl: float = 0.125
    skhr_cl: float = 1.0
    sshr_cl: float = 0.5
    sr_splt_cl: float = 0.5
    sk_splt_cl: float = 0.5
    ss_splt_cl: float = 0.5

    v_it: int = 0
    p_it: int = 1
    d_it: int = 0
    c_it: int = 4

    lst: float = 1.0
    ast: float = 1.0
    vst: float = 1.0

    anchors: List[SoftBodyAnchor] = field(default_factory=list)
    pinned_vertex_indices: List[int] = field(default_factory=list)

    @classmethod
    def read(cls, header, stream):
        enc = header.encoding
        body = cls(
            name=read_text(stream, enc),
            name_en=read_text(stream, enc),
            shape=read_enum(stream, SoftBodyShape, SoftBodyShapeError),
            material_index=header.read_material_index(stream),
            group=read_u8(stream),
            non_collision_mask=read_u16(stream),
            flags=read_u8(stream),
            b_link_distance=read_i32(stream),
            clusters=read_u32(stream),
            mass=read_f32(stream),
            collision_margin=read_f32(stream),
            aero_model=read_enum(stream, AeroModel, AeroModelError, read_i32),
        )
        for name in _CONFIG_FIELDS + _CLUSTER_FIELDS:
            setattr(body, name, read_f32(stream))
        for name in _ITERATION_FIELDS:
            setattr(body, name, read_u32(stream))
        for name in _MATERIAL_FIELDS:
            setattr(body, name, read_f32(stream))
        body.anchors = read_list(stream, lambda s: SoftBodyAnchor.read(header, s))
        body.pinned_vertex_indices = read_list(stream, header.read_vertex_index)
        return body

    def write(self, header, stream):
        enc = header.encoding
        write_text(stream, self.name, enc)
        write_text(stream, self.name_en, enc)
        write_u8(stream, self.shape)
        header.write_material_index(stream, self.material_index)
        write_u8(stream, self.group)
        write_u16(stream, self.non_collision_mask)
        write_u8(stream, self.flags)
        write_i32(stream, self.b_link_distance)
        write_u32(stream, self.clusters)
        write_f32(stream, self.mass)
        write_f32(stream, self.collision_margin)
        write_i32(stream, self.aero_model)
        for name in _CONFIG_FIELDS + _CLUSTER_FIELDS:
            write_f32(stream, getattr(self, name))
        for name in _ITERATION_FIELDS:
            write_u32(stream, getattr(self, name))
        for name in _MATERIAL_FIELDS:
            write_f32(stream, getattr(self, name))
        write_list(stream, self.anchors, lambda s, a: a.write(header, s))
        write_list(stream, self.pinned_vertex_indices, header.write_vertex_index)


def read_soft_bodies(header, stream):
    """Read the soft body section, or return [] when the version predates it."""
    if not header.has_soft_bodies:
        return []
    return read_list(stream, lambda s: SoftBody.read(header, s))


def write_soft_bodies(header, stream, soft_bodies):
    if not header.has_soft_bodies:
        if soft_bodies:
            _log.warning(
                "Dropping %d soft bodies: version %.1f has no soft body section",
                len(soft_bodies), header.version,
            )
        return
    write_list(stream, soft_bodies, lambda s, b: b.write(header, s))
