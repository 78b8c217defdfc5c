"""Display frames: named groups of bones and morphs shown in the editor UI."""

from dataclasses import dataclass, field
from typing import ClassVar, List

from .pmx_constants import DISPLAY_ITEM_BONE, DISPLAY_ITEM_MORPH
from .pmx_errors import DisplayItemTypeError
from .pmx_stream import (
    read_bool, read_list, read_text, read_u8,
    write_bool, write_list, write_text, write_u8,
)


class DisplayFrameItem:
    TAG: ClassVar[int] = -1

    @classmethod
    def read(cls, header, stream):
        tag = read_u8(stream)
        if tag == DISPLAY_ITEM_BONE:
            return BoneItem(header.read_bone_index(stream))
        if tag == DISPLAY_ITEM_MORPH:
            return MorphItem(header.read_morph_index(stream))
        raise DisplayItemTypeError(tag)

    def write(self, header, stream):
        raise NotImplementedError


@dataclass
class BoneItem(DisplayFrameItem):
    TAG: ClassVar[int] = DISPLAY_ITEM_BONE

    bone_index: int = 0

    def write(self, header, stream):
        write_u8(stream, self.TAG)
        header.write_bone_index(stream, self.bone_index)


@dataclass
class MorphItem(DisplayFrameItem):
    TAG: ClassVar[int] = DISPLAY_ITEM_MORPH

    morph_index: int = 0

    def write(self, header, stream):
        write_u8(stream, self.TAG)
        header.write_morph_index(stream, self.morph_index)


@dataclass
class DisplayFrame:
    name: str = ""
    name_en: str = ""
    # Special frames ("Root", expression frame) cannot be removed in editors
    special: bool = False
    items: List[DisplayFrameItem] = field(default_factory=list)

    @classmethod
    def read(cls, header, stream):
        enc = header.encoding
        return cls(
            name=read_text(stream, enc),
            name_en=read_text(stream, enc),
            special=read_bool(stream),
            items=read_list(stream, lambda s: DisplayFrameItem.read(header, s)),
        )

    def write(self, header, stream):
        enc = header.encoding
        write_text(stream, self.name, enc)
        write_text(stream, self.name_en, enc)
        write_bool(stream, self.special)
        write_list(stream, self.items, lambda s, item: item.write(header, s))


def read_display_frames(header, stream):
    return read_list(stream, lambda s: DisplayFrame.read(header, s))


def write_display_frames(header, stream, frames):
    write_list(stream, frames, lambda s, f: f.write(header, s))
