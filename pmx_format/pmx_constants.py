"""Constants for the PMX binary format."""

# File signature "PMX " read as a little-endian uint32
PMX_MAGIC = b"PMX "
PMX_MAGIC_VALUE = 0x20584D50

# Global data block (byte count prefix + 8 fixed fields + optional extra bytes)
GLOBAL_DATA_MIN_SIZE = 8

# Global data field positions
G_ENCODING = 0
G_ADDITIONAL_VEC4 = 1
G_VERTEX_INDEX_SIZE = 2
G_TEXTURE_INDEX_SIZE = 3
G_MATERIAL_INDEX_SIZE = 4
G_BONE_INDEX_SIZE = 5
G_MORPH_INDEX_SIZE = 6
G_RIGID_BODY_INDEX_SIZE = 7

# Versions
PMX_VERSION_2_0 = 2.0
PMX_VERSION_2_1 = 2.1

# float32 machine epsilon, used for the soft body version gate
FLT_EPSILON = 1.1920929e-07

# Soft bodies exist only from v2.1 onwards
SOFT_BODY_MIN_VERSION = PMX_VERSION_2_1 * (1.0 - FLT_EPSILON)

# Index width derivation boundaries (inclusive upper counts)
UNSIGNED_BIT8_MAX_COUNT = 0xFE
UNSIGNED_BIT16_MAX_COUNT = 0xFFFE
SIGNED_BIT8_MAX_COUNT = 0x7E
SIGNED_BIT16_MAX_COUNT = 0x7FFE

# "No reference" value for unsigned index kinds (texture, material, bone,
# morph, rigid body). Stored as the all-ones pattern of the index width.
NO_INDEX = -1

# Bone flags (16 bits)
BONE_CONNECT_TO_BONE = 0x0001
BONE_ROTATABLE = 0x0002
BONE_TRANSLATABLE = 0x0004
BONE_VISIBLE = 0x0008
BONE_ENABLED = 0x0010
BONE_IK = 0x0020
BONE_UNKNOWN_0040 = 0x0040
BONE_INHERIT_LOCAL = 0x0080
BONE_INHERIT_ROTATION = 0x0100
BONE_INHERIT_TRANSLATION = 0x0200
BONE_FIXED_AXIS = 0x0400
BONE_LOCAL_AXIS = 0x0800
BONE_PHYSICS_AFTER_DEFORM = 0x1000
BONE_EXTERNAL_PARENT = 0x2000
BONE_UNKNOWN_4000 = 0x4000
BONE_UNKNOWN_8000 = 0x8000

# Material flags (8 bits)
MATERIAL_DOUBLE_SIDED = 0x01
MATERIAL_GROUND_SHADOW = 0x02
MATERIAL_DRAW_SHADOW = 0x04
MATERIAL_RECEIVE_SHADOW = 0x08
MATERIAL_HAS_EDGE = 0x10
MATERIAL_VERTEX_COLOR = 0x20
MATERIAL_POINT_DRAW = 0x40
MATERIAL_LINE_DRAW = 0x80

# Skin (vertex weight deform) tags
SKIN_BDEF1 = 0
SKIN_BDEF2 = 1
SKIN_BDEF4 = 2
SKIN_SDEF = 3
SKIN_QDEF = 4

# Toon texture tags
TOON_TEXTURE_INDEX = 0
TOON_COMMON_INDEX = 1

# Morph payload tags
MORPH_GROUP = 0x00
MORPH_VERTEX = 0x01
MORPH_BONE = 0x02
MORPH_UV = 0x03
MORPH_UV1 = 0x04
MORPH_UV2 = 0x05
MORPH_UV3 = 0x06
MORPH_UV4 = 0x07
MORPH_MATERIAL = 0x08
MORPH_FLIP = 0x09
MORPH_IMPULSE = 0x0A

# Display frame item tags
DISPLAY_ITEM_BONE = 0
DISPLAY_ITEM_MORPH = 1
