"""The PMX model aggregate: eleven sections decoded and encoded in file order."""

import logging
from dataclasses import dataclass, field
from typing import List

from .pmx_bone import Bone, read_bones, write_bones
from .pmx_display import DisplayFrame, read_display_frames, write_display_frames
from .pmx_material import (
    Material, read_materials, read_textures, write_materials, write_textures,
)
from .pmx_morph import Morph, read_morphs, write_morphs
from .pmx_physics import (
    Joint, RigidBody, read_joints, read_rigid_bodies, write_joints,
    write_rigid_bodies,
)
from .pmx_soft_body import SoftBody, read_soft_bodies, write_soft_bodies
from .pmx_stream import read_text, write_text
from .pmx_vertex import Vertices, read_faces, write_faces


_log = logging.getLogger("pmx_format.model")


@dataclass
class ModelInfo:
    name: str = ""
    name_en: str = ""
    comment: str = ""
    comment_en: str = ""

    @classmethod
    def read(cls, header, stream):
        enc = header.encoding
        return cls(
            read_text(stream, enc),
            read_text(stream, enc),
            read_text(stream, enc),
            read_text(stream, enc),
        )

    def write(self, header, stream):
        enc = header.encoding
        for text in (self.name, self.name_en, self.comment, self.comment_en):
            write_text(stream, text, enc)


@dataclass
class PMXModel:
    """Everything after the header.

    Cross references between sections (bone parents, material textures and
    so on) are plain integers; nothing here checks that they resolve.
    ``faces`` is the flat vertex index list, three entries per triangle.
    """

    info: ModelInfo = field(default_factory=ModelInfo)
    vertices: Vertices = field(default_factory=Vertices)
    faces: List[int] = field(default_factory=list)
    textures: List[str] = field(default_factory=list)
    materials: List[Material] = field(default_factory=list)
    bones: List[Bone] = field(default_factory=list)
    morphs: List[Morph] = field(default_factory=list)
    display_frames: List[DisplayFrame] = field(default_factory=list)
    rigid_bodies: List[RigidBody] = field(default_factory=list)
    joints: List[Joint] = field(default_factory=list)
    soft_bodies: List[SoftBody] = field(default_factory=list)

    @classmethod
    def read(cls, header, stream):
        model = cls(info=ModelInfo.read(header, stream))
        model.vertices = Vertices.read(header, stream)
        model.faces = read_faces(header, stream)
        model.textures = read_textures(header, stream)
        model.materials = read_materials(header, stream)
        model.bones = read_bones(header, stream)
        model.morphs = read_morphs(header, stream)
        model.display_frames = read_display_frames(header, stream)
        model.rigid_bodies = read_rigid_bodies(header, stream)
        model.joints = read_joints(header, stream)
        model.soft_bodies = read_soft_bodies(header, stream)
        _log.debug("Read model %r: %s", model.info.name, model.section_counts())
        return model

    def write(self, header, stream):
        self.info.write(header, stream)
        self.vertices.write(header, stream)
        write_faces(header, stream, self.faces)
        write_textures(header, stream, self.textures)
        write_materials(header, stream, self.materials)
        write_bones(header, stream, self.bones)
        write_morphs(header, stream, self.morphs)
        write_display_frames(header, stream, self.display_frames)
        write_rigid_bodies(header, stream, self.rigid_bodies)
        write_joints(header, stream, self.joints)
        write_soft_bodies(header, stream, self.soft_bodies)
        _log.debug("Wrote model %r: %s", self.info.name, self.section_counts())

    def section_counts(self):
        """Element count per section, in file order."""
        return {
            "vertices": len(self.vertices),
            "faces": len(self.faces),
            "textures": len(self.textures),
            "materials": len(self.materials),
            "bones": len(self.bones),
            "morphs": len(self.morphs),
            "display_frames": len(self.display_frames),
            "rigid_bodies": len(self.rigid_bodies),
            "joints": len(self.joints),
            "soft_bodies": len(self.soft_bodies),
        }
