from click.testing import CliRunner

from pmx_format import read_pmx, write_pmx
from pmx_format.cli import main
from pmx_format.pmx_stream import Encoding


def test_info(tmp_path, model):
    path = tmp_path / "model.pmx"
    write_pmx(path, model)

    result = CliRunner().invoke(main, ["info", str(path)])
    assert result.exit_code == 0, result.output
    assert "version: 2.0" in result.output
    assert "encoding: UTF16LE" in result.output
    assert "vertices: 5" in result.output
    assert "morphs: 11" in result.output
    assert "name: テスト" in result.output


def test_resave_to_2_1_utf8(tmp_path, model_with_soft_bodies, monkeypatch):
    monkeypatch.delenv("PMX_VERSION", raising=False)
    monkeypatch.delenv("PMX_ENCODING", raising=False)
    src = tmp_path / "src.pmx"
    dst = tmp_path / "dst.pmx"
    write_pmx(src, model_with_soft_bodies, version=2.1)

    result = CliRunner().invoke(
        main, ["resave", str(src), str(dst), "--version", "2.1", "--encoding", "utf-8"]
    )
    assert result.exit_code == 0, result.output

    header, model = read_pmx(dst)
    assert header.has_soft_bodies
    assert header.encoding is Encoding.UTF8
    assert model == model_with_soft_bodies


def test_resave_uses_env_version(tmp_path, model, monkeypatch):
    monkeypatch.setenv("PMX_VERSION", "2.1")
    monkeypatch.delenv("PMX_ENCODING", raising=False)
    src = tmp_path / "src.pmx"
    dst = tmp_path / "dst.pmx"
    write_pmx(src, model)

    result = CliRunner().invoke(main, ["resave", str(src), str(dst)])
    assert result.exit_code == 0, result.output
    assert read_pmx(dst)[0].has_soft_bodies


def test_invalid_file_reports_error(tmp_path):
    path = tmp_path / "bad.pmx"
    path.write_bytes(b"not a pmx file")

    result = CliRunner().invoke(main, ["info", str(path)])
    assert result.exit_code == 1
    assert "Error: Invalid PMX magic" in result.output


def test_bad_encoding_option(tmp_path, model):
    src = tmp_path / "src.pmx"
    write_pmx(src, model)

    result = CliRunner().invoke(
        main, ["resave", str(src), str(tmp_path / "dst.pmx"), "--encoding", "latin-1"]
    )
    assert result.exit_code == 1
    assert "Unknown PMX text encoding" in result.output
    assert not (tmp_path / "dst.pmx").exists()
