"""Codec configuration.

Debug logging for the whole ``pmx_format`` logger tree is switched on with
the PMX_DEBUG=1 environment variable.
"""

import logging
import os
from dataclasses import dataclass

from .pmx_constants import PMX_VERSION_2_0
from .pmx_errors import PMXError
from .pmx_stream import Encoding


_pmx_debug = os.environ.get('PMX_DEBUG', '') == '1'
_log = logging.getLogger("pmx_format")
if _pmx_debug:
    _log.setLevel(logging.DEBUG)
    if not _log.handlers:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        _log.addHandler(_handler)

_ENCODING_NAMES = {
    "utf16": Encoding.UTF16LE,
    "utf-16": Encoding.UTF16LE,
    "utf16le": Encoding.UTF16LE,
    "utf-16-le": Encoding.UTF16LE,
    "utf8": Encoding.UTF8,
    "utf-8": Encoding.UTF8,
}


def parse_encoding(name):
    """Map a user-facing encoding name (e.g. "utf-8") to an Encoding."""
    try:
        return _ENCODING_NAMES[name.strip().lower()]
    except KeyError:
        raise PMXError(f"Unknown PMX text encoding: {name!r}") from None


@dataclass
class CodecConfig:
    """Settings used when writing a model without an explicit header.

    ``version`` decides whether the soft body section is written (2.1) or
    omitted (2.0). With ``atomic_write`` a path target is written to a
    sibling temporary file first and then moved over the destination.
    """

    version: float = PMX_VERSION_2_0
    encoding: Encoding = Encoding.UTF16LE
    atomic_write: bool = True

    @classmethod
    def from_env(cls, environ=None):
        """Build a config from PMX_VERSION / PMX_ENCODING overrides."""
        environ = os.environ if environ is None else environ
        config = cls()
        version = environ.get('PMX_VERSION', '')
        if version:
            try:
                config.version = float(version)
            except ValueError:
                raise PMXError(f"Invalid PMX_VERSION: {version!r}") from None
        encoding = environ.get('PMX_ENCODING', '')
        if encoding:
            config.encoding = parse_encoding(encoding)
        return config
