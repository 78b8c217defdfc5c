import io
import os
import stat

import pytest

from pmx_format import (
    CodecConfig, Encoding, PMXHeader, PMXModel, dumps, loads, read_pmx, write_pmx,
)
from pmx_format.pmx_errors import (
    IndexRangeError, MagicError, PMXIOError, UnexpectedEOFError,
)
from pmx_format.pmx_model import ModelInfo


def test_roundtrip_identity(model):
    data = dumps(model)
    header, decoded = loads(data)
    assert header == PMXHeader.from_model(model)
    assert decoded == model
    assert dumps(decoded) == data


def test_roundtrip_utf8(model):
    data = dumps(model, config=CodecConfig(encoding=Encoding.UTF8))
    header, decoded = loads(data)
    assert header.encoding is Encoding.UTF8
    assert decoded == model


def test_reencode_with_read_header_is_byte_identical(model):
    data = dumps(model)
    header, decoded = loads(data)
    buf = io.BytesIO()
    header.write(buf)
    decoded.write(header, buf)
    assert buf.getvalue() == data


def test_empty_model():
    data = dumps(PMXModel())
    header, decoded = loads(data)
    assert decoded == PMXModel()
    # header(17) + 4 empty strings + 9 zero counts
    assert len(data) == 17 + 16 + 9 * 4


def test_soft_bodies_written_at_2_1(model_with_soft_bodies):
    header, decoded = loads(dumps(model_with_soft_bodies, version=2.1))
    assert header.has_soft_bodies
    assert decoded == model_with_soft_bodies


def test_soft_bodies_dropped_at_2_0(model, model_with_soft_bodies):
    data = dumps(model_with_soft_bodies, version=2.0)
    assert data == dumps(model, version=2.0)

    header, decoded = loads(data)
    assert not header.has_soft_bodies
    assert decoded.soft_bodies == []
    assert decoded == model


def test_empty_soft_body_section_at_2_1(model):
    data_20 = dumps(model, version=2.0)
    data_21 = dumps(model, version=2.1)
    # 2.1 adds a zero count; the version float differs too
    assert len(data_21) == len(data_20) + 4
    assert data_21.endswith(b"\x00\x00\x00\x00")


def test_truncated_model(model):
    data = dumps(model)
    with pytest.raises(UnexpectedEOFError):
        loads(data[:-1])


def test_bad_magic():
    with pytest.raises(MagicError):
        loads(b"Pmx " + b"\x00" * 20)


def test_index_out_of_range_on_write(model):
    model.materials[0].texture_index = 255
    with pytest.raises(IndexRangeError):
        dumps(model)
    model.materials[0].texture_index = 254
    dumps(model)


def test_section_counts(model):
    assert model.section_counts() == {
        "vertices": 5,
        "faces": 9,
        "textures": 3,
        "materials": 2,
        "bones": 3,
        "morphs": 11,
        "display_frames": 3,
        "rigid_bodies": 2,
        "joints": 2,
        "soft_bodies": 0,
    }


def test_file_roundtrip(tmp_path, model):
    path = tmp_path / "model.pmx"
    header = write_pmx(path, model)
    assert header == PMXHeader.from_model(model)

    read_header, decoded = read_pmx(path)
    assert read_header == header
    assert decoded == model
    assert [p.name for p in tmp_path.iterdir()] == ["model.pmx"]


def test_failed_write_keeps_existing_file(tmp_path, model):
    path = tmp_path / "model.pmx"
    path.write_bytes(b"original")
    model.bones[0].parent_index = 1000
    with pytest.raises(IndexRangeError):
        write_pmx(path, model)
    assert path.read_bytes() == b"original"
    assert [p.name for p in tmp_path.iterdir()] == ["model.pmx"]


def test_non_atomic_write(tmp_path, model):
    path = tmp_path / "model.pmx"
    write_pmx(path, model, config=CodecConfig(atomic_write=False))
    assert read_pmx(path)[1] == model


def test_stream_targets(model):
    buf = io.BytesIO()
    write_pmx(buf, model, version=2.1)
    buf.seek(0)
    header, decoded = read_pmx(buf)
    assert header.has_soft_bodies
    assert decoded == model


def test_missing_file(tmp_path):
    with pytest.raises(PMXIOError):
        read_pmx(tmp_path / "missing.pmx")


class _FailingStream:
    def read(self, size=-1):
        raise OSError("device gone")


def test_stream_oserror_is_wrapped():
    with pytest.raises(PMXIOError) as exc_info:
        read_pmx(_FailingStream())
    assert isinstance(exc_info.value.__cause__, OSError)


def test_model_info_strings(model):
    model.info = ModelInfo("名前", "", "", "")
    assert loads(dumps(model))[1].info == ModelInfo("名前", "", "", "")


def _mode(path):
    return stat.S_IMODE(os.stat(path).st_mode)


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_atomic_write_matches_plain_open_mode(tmp_path, model):
    atomic = tmp_path / "atomic.pmx"
    plain = tmp_path / "plain.pmx"
    write_pmx(atomic, model)
    write_pmx(plain, model, config=CodecConfig(atomic_write=False))
    assert _mode(atomic) == _mode(plain)


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_atomic_write_keeps_existing_mode(tmp_path, model):
    path = tmp_path / "model.pmx"
    path.write_bytes(b"original")
    os.chmod(path, 0o640)
    write_pmx(path, model)
    assert _mode(path) == 0o640
    assert read_pmx(path)[1] == model
