import pytest

from pmx_format.pmx_bone import IK, Bone, IKLink, InheritMode, InheritTransform
from pmx_format.pmx_display import BoneItem, DisplayFrame, MorphItem
from pmx_format.pmx_header import PMXHeader
from pmx_format.pmx_material import CommonToon, Material, MixMode, TextureToon
from pmx_format.pmx_model import ModelInfo, PMXModel
from pmx_format.pmx_morph import (
    BoneMorph, BoneOffset, ControlPanel, FlipMorph, FlipOffset, GroupMorph,
    GroupOffset, ImpulseMorph, ImpulseOffset, MaterialMorph, MaterialOffset,
    Morph, UV1Morph, UV2Morph, UV3Morph, UV4Morph, UVMorph, UVOffset,
    VertexMorph, VertexOffset,
)
from pmx_format.pmx_physics import Joint, JointType, PhysicsMode, RigidBody, RigidShape
from pmx_format.pmx_soft_body import (
    SOFT_BODY_B_LINK, AeroModel, SoftBody, SoftBodyAnchor, SoftBodyShape,
)
from pmx_format.pmx_stream import Encoding
from pmx_format.pmx_vertex import BDEF1, BDEF2, BDEF4, QDEF, SDEF, Vertices


def build_model(with_soft_bodies=False):
    """A small model touching every record variant.

    All floats are exactly representable as float32.
    """
    vertices = Vertices(additional_vec4s=[[]])
    skins = [
        BDEF1(0),
        BDEF2(0, 1, 0.75),
        BDEF4((0, 1, 2, -1), (0.5, 0.25, 0.25, 0.0)),
        SDEF(1, 2, 0.5, (0.0, 1.0, 0.0), (0.0, 0.5, 0.0), (0.0, 1.5, 0.0)),
        QDEF((2, 1, 0, 0), (1.0, 0.0, 0.0, 0.0)),
    ]
    for i, skin in enumerate(skins):
        vertices.append(
            (float(i), 0.5 * i, -1.0),
            (0.0, 0.0, 1.0),
            (0.25 * i, 0.5),
            skin,
            edge_scale=1.0 + i,
            additional=[(1.0, 2.0, 3.0, float(i))],
        )

    materials = [
        Material(
            name="肌", name_en="skin", diffuse=(1.0, 0.5, 0.25, 1.0),
            specular=(0.5, 0.5, 0.5, 8.0), ambient=(0.25, 0.25, 0.25),
            flags=0x1F, edge_color=(0.0, 0.0, 0.0, 1.0), edge_size=1.5,
            texture_index=0, sphere_texture_index=1,
            sphere_mode=MixMode.MULTIPLY, toon=CommonToon(3),
            memo="memo", surface_count=6,
        ),
        Material(
            name="髪", name_en="hair", texture_index=-1,
            sphere_texture_index=-1, toon=TextureToon(2), surface_count=3,
        ),
    ]

    bones = [
        Bone(name="センター", name_en="center", translatable=True),
        Bone(
            name="上半身", name_en="upper body", position=(0.0, 10.0, 0.0),
            parent_index=0, deform_layer=1, connection=2,
            inherit=InheritTransform(InheritMode.ROTATION, 0, 0.5),
            fixed_axis=(0.0, 1.0, 0.0),
            local_axis=((1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
            external_parent_index=4,
        ),
        Bone(
            name="足IK", name_en="leg IK", parent_index=0,
            physics_after_deform=True,
            ik=IK(1, 40, 2.0, [
                IKLink(0, ((-3.0, 0.0, 0.0), (-0.5, 0.0, 0.0))),
                IKLink(1),
            ]),
        ),
    ]

    morphs = [
        Morph("あ", "a", ControlPanel.MOUTH, VertexMorph([VertexOffset(0, (0.0, 0.5, 0.0))])),
        Morph("g", "group", ControlPanel.OTHER, GroupMorph([GroupOffset(0, 1.0)])),
        Morph("b", "bone", ControlPanel.SYSTEM,
              BoneMorph([BoneOffset(1, (0.0, 1.0, 0.0), (0.0, 0.0, 0.0, 1.0))])),
        Morph("uv", "", ControlPanel.EYE, UVMorph([UVOffset(1, (0.5, 0.0, 0.0, 0.0))])),
        Morph("uv1", "", ControlPanel.EYE, UV1Morph([UVOffset(2, (0.0, 0.5, 0.0, 0.0))])),
        Morph("uv2", "", ControlPanel.EYE, UV2Morph([UVOffset(3, (0.0, 0.0, 0.5, 0.0))])),
        Morph("uv3", "", ControlPanel.EYE, UV3Morph([UVOffset(4, (0.0, 0.0, 0.0, 0.5))])),
        Morph("uv4", "", ControlPanel.EYEBROW, UV4Morph([UVOffset(0, (1.0, 1.0, 1.0, 1.0))])),
        Morph("m", "material", ControlPanel.OTHER, MaterialMorph([
            MaterialOffset(
                -1, formula=1, diffuse=(1.0, 0.0, 0.0, 1.0),
                specular=(0.5, 0.5, 0.5), specular_factor=4.0,
                ambient=(0.25, 0.25, 0.25), edge_color=(0.0, 0.0, 1.0, 1.0),
                edge_size=2.0, texture_factor=(1.0, 1.0, 1.0, 0.5),
                sphere_texture_factor=(0.5, 0.5, 0.5, 0.5),
                toon_texture_factor=(0.0, 0.0, 0.0, 0.25),
            ),
        ])),
        Morph("f", "flip", ControlPanel.OTHER, FlipMorph([FlipOffset(1, 0.5)])),
        Morph("i", "impulse", ControlPanel.OTHER, ImpulseMorph([
            ImpulseOffset(0, True, (0.0, 0.0, 1.0), (0.0, 2.0, 0.0)),
        ])),
    ]

    display_frames = [
        DisplayFrame("Root", "Root", True, [BoneItem(0)]),
        DisplayFrame("表情", "Exp", True, [MorphItem(0), MorphItem(1)]),
        DisplayFrame("体", "Body", False, [BoneItem(1), BoneItem(2), MorphItem(10)]),
    ]

    rigid_bodies = [
        RigidBody("頭", "head", 1, 2, 0xFFFE, RigidShape.SPHERE, (1.0, 1.0, 1.0),
                  (0.0, 12.0, 0.0), (0.0, 0.0, 0.0), 1.0, 0.5, 0.5, 0.0, 0.5,
                  PhysicsMode.STATIC),
        RigidBody("髪", "hair", -1, 3, 0x0001, RigidShape.CAPSULE, (0.5, 2.0, 0.0),
                  (0.0, 11.0, -1.0), (0.5, 0.0, 0.0), 0.25, 0.75, 0.75, 0.0, 0.0,
                  PhysicsMode.DYNAMIC_BONE),
    ]

    joints = [
        Joint("首", "neck", JointType.SPRING_6DOF, 0, 1, (0.0, 11.5, 0.0),
              (0.0, 0.0, 0.0), (0.0, 0.0, 0.0), (0.0, 0.0, 0.0),
              (-0.5, -0.5, -0.5), (0.5, 0.5, 0.5), (0.0, 0.0, 0.0), (8.0, 8.0, 8.0)),
        Joint("hinge", "", JointType.HINGE, 1, -1),
    ]

    soft_bodies = []
    if with_soft_bodies:
        soft_bodies = [
            SoftBody(
                name="スカート", name_en="skirt", shape=SoftBodyShape.TRI_MESH,
                material_index=0, group=4, non_collision_mask=0x00FF,
                flags=SOFT_BODY_B_LINK, b_link_distance=3, clusters=2,
                mass=2.0, collision_margin=0.0625,
                aero_model=AeroModel.F_ONE_SIDED,
                v_it=1, p_it=2, d_it=3, c_it=4,
                anchors=[SoftBodyAnchor(0, 1, True), SoftBodyAnchor(1, 2)],
                pinned_vertex_indices=[0, 4],
            ),
            SoftBody(name="rope", shape=SoftBodyShape.ROPE),
        ]

    return PMXModel(
        info=ModelInfo("テスト", "test", "コメント", "comment\nline 2"),
        vertices=vertices,
        faces=[0, 1, 2, 2, 3, 4, 4, 3, 0],
        textures=["tex\\body.png", "sphere.spa", "toon.bmp"],
        materials=materials,
        bones=bones,
        morphs=morphs,
        display_frames=display_frames,
        rigid_bodies=rigid_bodies,
        joints=joints,
        soft_bodies=soft_bodies,
    )


@pytest.fixture
def model():
    return build_model()


@pytest.fixture
def model_with_soft_bodies():
    return build_model(with_soft_bodies=True)


@pytest.fixture
def header():
    """8-bit everything, UTF-16LE, version 2.0."""
    return PMXHeader()


@pytest.fixture
def utf8_header():
    return PMXHeader(encoding=Encoding.UTF8)
