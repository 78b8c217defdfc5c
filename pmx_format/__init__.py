"""Reader and writer for PMX (Polygon Model eXtended) 2.0 / 2.1 model files."""

from .pmx_bone import IK, Bone, IKLink, InheritMode, InheritTransform
from .pmx_config import CodecConfig
from .pmx_display import BoneItem, DisplayFrame, MorphItem
from .pmx_errors import PMXError, PMXIOError
from .pmx_header import IndexSize, PMXHeader
from .pmx_material import CommonToon, Material, MixMode, TextureToon
from .pmx_model import ModelInfo, PMXModel
from .pmx_morph import ControlPanel, Morph
from .pmx_physics import Joint, JointType, PhysicsMode, RigidBody, RigidShape
from .pmx_reader import PMXReader, loads, read_pmx
from .pmx_soft_body import AeroModel, SoftBody, SoftBodyAnchor, SoftBodyShape
from .pmx_stream import Encoding
from .pmx_vertex import BDEF1, BDEF2, BDEF4, QDEF, SDEF, Vertices
from .pmx_writer import PMXWriter, dumps, write_pmx
