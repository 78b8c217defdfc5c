"""Rigid bodies and joints."""

import enum
from dataclasses import dataclass
from typing import Tuple

from .pmx_constants import NO_INDEX
from .pmx_errors import JointTypeError, PhysicsModeError, RigidShapeError
from .pmx_stream import (
    read_enum, read_f32, read_list, read_text, read_u8, read_u16, read_vec3,
    write_f32, write_list, write_text, write_u8, write_u16, write_vec3,
)


Vec3 = Tuple[float, float, float]


class RigidShape(enum.IntEnum):
    SPHERE = 0
    BOX = 1
    CAPSULE = 2


class PhysicsMode(enum.IntEnum):
    STATIC = 0              # follows its bone
    DYNAMIC = 1             # driven by physics
    DYNAMIC_BONE = 2        # physics, position snapped to bone


class JointType(enum.IntEnum):
    SPRING_6DOF = 0
    SIX_DOF = 1
    P2P = 2
    CONE_TWIST = 3
    SLIDER = 4
    HINGE = 5


@dataclass
class RigidBody:
    name: str = ""
    name_en: str = ""
    bone_index: int = NO_INDEX
    group: int = 0
    non_collision_mask: int = 0
    shape: RigidShape = RigidShape.SPHERE
    size: Vec3 = (1.0, 1.0, 1.0)
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    mass: float = 1.0
    move_damping: float = 0.5
    rotation_damping: float = 0.5
    repulsion: float = 0.0
    friction: float = 0.5
    mode: PhysicsMode = PhysicsMode.STATIC

    @classmethod
    def read(cls, header, stream):
        enc = header.encoding
        return cls(
            name=read_text(stream, enc),
            name_en=read_text(stream, enc),
            bone_index=header.read_bone_index(stream),
            group=read_u8(stream),
            non_collision_mask=read_u16(stream),
            shape=read_enum(stream, RigidShape, RigidShapeError),
            size=read_vec3(stream),
            position=read_vec3(stream),
            rotation=read_vec3(stream),
            mass=read_f32(stream),
            move_damping=read_f32(stream),
            rotation_damping=read_f32(stream),
            repulsion=read_f32(stream),
            friction=read_f32(stream),
            mode=read_enum(stream, PhysicsMode, PhysicsModeError),
        )

    def write(self, header, stream):
        enc = header.encoding
        write_text(stream, self.name, enc)
        write_text(stream, self.name_en, enc)
        header.write_bone_index(stream, self.bone_index)
        write_u8(stream, self.group)
        write_u16(stream, self.non_collision_mask)
        write_u8(stream, self.shape)
        write_vec3(stream, self.size)
        write_vec3(stream, self.position)
        write_vec3(stream, self.rotation)
        write_f32(stream, self.mass)
        write_f32(stream, self.move_damping)
        write_f32(stream, self.rotation_damping)
        write_f32(stream, self.repulsion)
        write_f32(stream, self.friction)
        write_u8(stream, self.mode)


@dataclass
class Joint:
    name: str = ""
    name_en: str = ""
    joint_type: JointType = JointType.SPRING_6DOF
    rigid_body_index_a: int = NO_INDEX
    rigid_body_index_b: int = NO_INDEX
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    move_limit_lower: Vec3 = (0.0, 0.0, 0.0)
    move_limit_upper: Vec3 = (0.0, 0.0, 0.0)
    rotation_limit_lower: Vec3 = (0.0, 0.0, 0.0)
    rotation_limit_upper: Vec3 = (0.0, 0.0, 0.0)
    spring_move: Vec3 = (0.0, 0.0, 0.0)
    spring_rotation: Vec3 = (0.0, 0.0, 0.0)

    @classmethod
    def read(cls, header, stream):
        enc = header.encoding
        return cls(
            name=read_text(stream, enc),
            name_en=read_text(stream, enc),
            joint_type=read_enum(stream, JointType, JointTypeError),
            rigid_body_index_a=header.read_rigid_body_index(stream),
            rigid_body_index_b=header.read_rigid_body_index(stream),
            position=read_vec3(stream),
            rotation=read_vec3(stream),
            move_limit_lower=read_vec3(stream),
            move_limit_upper=read_vec3(stream),
            rotation_limit_lower=read_vec3(stream),
            rotation_limit_upper=read_vec3(stream),
            spring_move=read_vec3(stream),
            spring_rotation=read_vec3(stream),
        )

    def write(self, header, stream):
        enc = header.encoding
        write_text(stream, self.name, enc)
        write_text(stream, self.name_en, enc)
        write_u8(stream, self.joint_type)
        header.write_rigid_body_index(stream, self.rigid_body_index_a)
        header.write_rigid_body_index(stream, self.rigid_body_index_b)
        write_vec3(stream, self.position)
        write_vec3(stream, self.rotation)
        write_vec3(stream, self.move_limit_lower)
        write_vec3(stream, self.move_limit_upper)
        write_vec3(stream, self.rotation_limit_lower)
        write_vec3(stream, self.rotation_limit_upper)
        write_vec3(stream, self.spring_move)
        write_vec3(stream, self.spring_rotation)


def read_rigid_bodies(header, stream):
    return read_list(stream, lambda s: RigidBody.read(header, s))


def write_rigid_bodies(header, stream, bodies):
    write_list(stream, bodies, lambda s, b: b.write(header, s))


def read_joints(header, stream):
    return read_list(stream, lambda s: Joint.read(header, s))


def write_joints(header, stream, joints):
    write_list(stream, joints, lambda s, j: j.write(header, s))
