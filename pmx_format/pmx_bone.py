"""Bones, inherit (append) blocks and IK chains.

Bone record layout:
    name, name_en:      text
    position:           Vec3f
    parent:             bone index
    deform layer:       int32
    flags:              uint16
    connection:         bone index (flag 0x0001) or Vec3f offset
    inherit:            bone index + float weight (flag 0x0100 or 0x0200)
    fixed axis:         Vec3f (flag 0x0400)
    local axis:         Vec3f x axis + Vec3f z axis (flag 0x0800)
    external parent:    bone index (flag 0x2000)
    ik:                 IK block (flag 0x0020)

The flag word is not kept on the Bone. Bone.flags() rebuilds it from which
optional blocks are present plus the boolean attributes; every one of the
16 bits maps to exactly one attribute, so any flag word read from a file is
reproduced on write.
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .pmx_constants import (
    NO_INDEX,
    BONE_CONNECT_TO_BONE, BONE_ROTATABLE, BONE_TRANSLATABLE, BONE_VISIBLE,
    BONE_ENABLED, BONE_IK, BONE_UNKNOWN_0040, BONE_INHERIT_LOCAL,
    BONE_INHERIT_ROTATION, BONE_INHERIT_TRANSLATION, BONE_FIXED_AXIS,
    BONE_LOCAL_AXIS, BONE_PHYSICS_AFTER_DEFORM, BONE_EXTERNAL_PARENT,
    BONE_UNKNOWN_4000, BONE_UNKNOWN_8000,
)
from .pmx_stream import (
    read_bool, read_f32, read_i32, read_list, read_text, read_u16, read_vec3,
    write_bool, write_f32, write_i32, write_list, write_text, write_u16,
    write_vec3,
)


Vec3 = Tuple[float, float, float]


class InheritMode(enum.Enum):
    """Which parts of the inherit source bone's transform are appended."""
    ROTATION = BONE_INHERIT_ROTATION
    TRANSLATION = BONE_INHERIT_TRANSLATION
    ROTATION_TRANSLATION = BONE_INHERIT_ROTATION | BONE_INHERIT_TRANSLATION


@dataclass
class InheritTransform:
    mode: InheritMode
    bone_index: int
    weight: float


@dataclass
class IKLink:
    bone_index: int
    # (lower, upper) rotation limits in radians, or None when unlimited
    angle_limit: Optional[Tuple[Vec3, Vec3]] = None

    @classmethod
    def read(cls, header, stream):
        bone_index = header.read_bone_index(stream)
        if read_bool(stream):
            return cls(bone_index, (read_vec3(stream), read_vec3(stream)))
        return cls(bone_index)

    def write(self, header, stream):
        header.write_bone_index(stream, self.bone_index)
        write_bool(stream, self.angle_limit is not None)
        if self.angle_limit is not None:
            lower, upper = self.angle_limit
            write_vec3(stream, lower)
            write_vec3(stream, upper)


@dataclass
class IK:
    target_bone_index: int
    loop_count: int
    limit_angle: float
    links: List[IKLink] = field(default_factory=list)

    @classmethod
    def read(cls, header, stream):
        return cls(
            target_bone_index=header.read_bone_index(stream),
            loop_count=read_i32(stream),
            limit_angle=read_f32(stream),
            links=read_list(stream, lambda s: IKLink.read(header, s)),
        )

    def write(self, header, stream):
        header.write_bone_index(stream, self.target_bone_index)
        write_i32(stream, self.loop_count)
        write_f32(stream, self.limit_angle)
        write_list(stream, self.links, lambda s, link: link.write(header, s))


@dataclass
class Bone:
    name: str = ""
    name_en: str = ""
    position: Vec3 = (0.0, 0.0, 0.0)
    parent_index: int = NO_INDEX
    deform_layer: int = 0
    # Tail: a bone index, or a position offset relative to this bone
    connection: Union[int, Vec3] = (0.0, 0.0, 0.0)
    rotatable: bool = True
    translatable: bool = False
    visible: bool = True
    enabled: bool = True
    inherit_local: bool = False
    inherit: Optional[InheritTransform] = None
    fixed_axis: Optional[Vec3] = None
    local_axis: Optional[Tuple[Vec3, Vec3]] = None
    physics_after_deform: bool = False
    external_parent_index: Optional[int] = None
    ik: Optional[IK] = None
    unknown_0040: bool = False
    unknown_4000: bool = False
    unknown_8000: bool = False

    @property
    def connects_to_bone(self):
        return isinstance(self.connection, int)

    def flags(self):
        """Compute the wire flag word from the current attributes."""
        flags = 0
        if self.connects_to_bone:
            flags |= BONE_CONNECT_TO_BONE
        if self.rotatable:
            flags |= BONE_ROTATABLE
        if self.translatable:
            flags |= BONE_TRANSLATABLE
        if self.visible:
            flags |= BONE_VISIBLE
        if self.enabled:
            flags |= BONE_ENABLED
        if self.ik is not None:
            flags |= BONE_IK
        if self.unknown_0040:
            flags |= BONE_UNKNOWN_0040
        if self.inherit_local:
            flags |= BONE_INHERIT_LOCAL
        if self.inherit is not None:
            flags |= self.inherit.mode.value
        if self.fixed_axis is not None:
            flags |= BONE_FIXED_AXIS
        if self.local_axis is not None:
            flags |= BONE_LOCAL_AXIS
        if self.physics_after_deform:
            flags |= BONE_PHYSICS_AFTER_DEFORM
        if self.external_parent_index is not None:
            flags |= BONE_EXTERNAL_PARENT
        if self.unknown_4000:
            flags |= BONE_UNKNOWN_4000
        if self.unknown_8000:
            flags |= BONE_UNKNOWN_8000
        return flags

    @classmethod
    def read(cls, header, stream):
        enc = header.encoding
        bone = cls(
            name=read_text(stream, enc),
            name_en=read_text(stream, enc),
            position=read_vec3(stream),
            parent_index=header.read_bone_index(stream),
            deform_layer=read_i32(stream),
        )
        flags = read_u16(stream)

        bone.rotatable = bool(flags & BONE_ROTATABLE)
        bone.translatable = bool(flags & BONE_TRANSLATABLE)
        bone.visible = bool(flags & BONE_VISIBLE)
        bone.enabled = bool(flags & BONE_ENABLED)
        bone.unknown_0040 = bool(flags & BONE_UNKNOWN_0040)
        bone.inherit_local = bool(flags & BONE_INHERIT_LOCAL)
        bone.physics_after_deform = bool(flags & BONE_PHYSICS_AFTER_DEFORM)
        bone.unknown_4000 = bool(flags & BONE_UNKNOWN_4000)
        bone.unknown_8000 = bool(flags & BONE_UNKNOWN_8000)

        # Optional blocks are packed back to back in this exact order
        if flags & BONE_CONNECT_TO_BONE:
            bone.connection = header.read_bone_index(stream)
        else:
            bone.connection = read_vec3(stream)

        inherit_bits = flags & (BONE_INHERIT_ROTATION | BONE_INHERIT_TRANSLATION)
        if inherit_bits:
            bone.inherit = InheritTransform(
                InheritMode(inherit_bits),
                header.read_bone_index(stream),
                read_f32(stream),
            )

        if flags & BONE_FIXED_AXIS:
            bone.fixed_axis = read_vec3(stream)

        if flags & BONE_LOCAL_AXIS:
            bone.local_axis = (read_vec3(stream), read_vec3(stream))

        if flags & BONE_EXTERNAL_PARENT:
            bone.external_parent_index = header.read_bone_index(stream)

        if flags & BONE_IK:
            bone.ik = IK.read(header, stream)

        return bone

    def write(self, header, stream):
        enc = header.encoding
        write_text(stream, self.name, enc)
        write_text(stream, self.name_en, enc)
        write_vec3(stream, self.position)
        header.write_bone_index(stream, self.parent_index)
        write_i32(stream, self.deform_layer)
        write_u16(stream, self.flags())

        if self.connects_to_bone:
            header.write_bone_index(stream, self.connection)
        else:
            write_vec3(stream, self.connection)

        if self.inherit is not None:
            header.write_bone_index(stream, self.inherit.bone_index)
            write_f32(stream, self.inherit.weight)

        if self.fixed_axis is not None:
            write_vec3(stream, self.fixed_axis)

        if self.local_axis is not None:
            x_axis, z_axis = self.local_axis
            write_vec3(stream, x_axis)
            write_vec3(stream, z_axis)

        if self.external_parent_index is not None:
            header.write_bone_index(stream, self.external_parent_index)

        if self.ik is not None:
            self.ik.write(header, stream)


def read_bones(header, stream):
    return read_list(stream, lambda s: Bone.read(header, s))


def write_bones(header, stream, bones):
    write_list(stream, bones, lambda s, b: b.write(header, s))
