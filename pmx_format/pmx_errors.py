"""Exceptions raised while decoding or encoding PMX data.

Every error derives from PMXError, which is a ValueError so callers that
already guard binary parsing with ``except ValueError`` keep working.
"""


class PMXError(ValueError):
    """Base class for all PMX codec failures."""


class MagicError(PMXError):
    """The stream does not start with the PMX signature."""

    def __init__(self, magic):
        self.magic = magic
        super().__init__(f"Invalid PMX magic: {magic!r}")


class GlobalDataError(PMXError):
    """The header global data block is shorter than the fixed fields."""

    def __init__(self, length):
        self.length = length
        super().__init__(f"PMX global data block too short: {length} < 8")


class TagError(PMXError):
    """A tag or enumeration byte holds a value the format does not define."""

    what = "tag"

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid {self.what}: {value}")


class InvalidEncodingError(TagError):
    what = "text encoding"


class InvalidIndexSizeError(TagError):
    what = "index size"


class JointTypeError(TagError):
    what = "joint type"


class RigidShapeError(TagError):
    what = "rigid body shape"


class PhysicsModeError(TagError):
    what = "rigid body physics mode"


class SoftBodyShapeError(TagError):
    what = "soft body shape"


class AeroModelError(TagError):
    what = "soft body aero model"


class MixModeError(TagError):
    what = "sphere texture mix mode"


class MorphTypeError(TagError):
    what = "morph type"


class ControlPanelError(TagError):
    what = "morph control panel"


class DisplayItemTypeError(TagError):
    what = "display frame item type"


class SkinTypeError(TagError):
    what = "skin type"


class ToonTypeError(TagError):
    what = "toon texture type"


class BoolValueError(TagError):
    what = "boolean byte"


class IndexRangeError(PMXError):
    """An index does not fit the width selected in the header."""

    def __init__(self, value, size):
        self.value = value
        self.size = size
        super().__init__(f"Index {value} does not fit a {size}-byte index")


class FieldRangeError(PMXError):
    """A fixed-width field holds a value its wire type cannot represent."""


class TextEncodingError(PMXError):
    """Text bytes are malformed for, or text cannot be encoded to, the header encoding."""


class VertexCountError(PMXError):
    """Vertex columns disagree with the declared vertex count."""


class HeaderError(PMXError):
    """A header cannot be serialized as given."""


class PMXIOError(PMXError):
    """The underlying byte source or sink failed."""


class UnexpectedEOFError(PMXIOError):
    """The byte source ended in the middle of a value."""

    def __init__(self, wanted, got):
        self.wanted = wanted
        self.got = got
        super().__init__(f"Unexpected end of data: wanted {wanted} bytes, got {got}")
