import os
import subprocess
import sys
from pathlib import Path

import pytest

from pmx_format.pmx_config import CodecConfig, parse_encoding
from pmx_format.pmx_errors import PMXError
from pmx_format.pmx_stream import Encoding


ROOT = Path(__file__).resolve().parent.parent


def test_defaults():
    config = CodecConfig.from_env({})
    assert config == CodecConfig()
    assert config.version == 2.0
    assert config.encoding is Encoding.UTF16LE
    assert config.atomic_write


def test_env_overrides():
    config = CodecConfig.from_env({"PMX_VERSION": "2.1", "PMX_ENCODING": "UTF-8"})
    assert config.version == 2.1
    assert config.encoding is Encoding.UTF8


def test_invalid_env_version():
    with pytest.raises(PMXError):
        CodecConfig.from_env({"PMX_VERSION": "two"})


@pytest.mark.parametrize("name, expected", [
    ("utf-16", Encoding.UTF16LE),
    ("UTF16LE", Encoding.UTF16LE),
    (" utf8 ", Encoding.UTF8),
])
def test_parse_encoding(name, expected):
    assert parse_encoding(name) is expected


def test_parse_encoding_rejects_unknown():
    with pytest.raises(PMXError):
        parse_encoding("shift_jis")


def _run_roundtrip(debug):
    env = dict(os.environ)
    env.pop("PMX_DEBUG", None)
    if debug:
        env["PMX_DEBUG"] = "1"
    code = "from pmx_format import PMXModel, dumps, loads; loads(dumps(PMXModel()))"
    return subprocess.run(
        [sys.executable, "-c", code], env=env, cwd=ROOT, capture_output=True, text=True, check=True,
    )


def test_debug_env_prints_log_records():
    result = _run_roundtrip(debug=True)
    assert "DEBUG pmx_format.model: Read model" in result.stderr
    assert "DEBUG pmx_format.model: Wrote model" in result.stderr


def test_no_log_output_without_debug_env():
    assert _run_roundtrip(debug=False).stderr == ""
