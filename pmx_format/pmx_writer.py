"""PMX file writer.

The model is encoded into memory first, so a failed encode never leaves a
half-written file behind. Path targets are replaced atomically unless the
config disables it.
"""

import io
import logging
import os
import stat
import tempfile

from .pmx_config import CodecConfig
from .pmx_errors import PMXIOError
from .pmx_header import PMXHeader


_log = logging.getLogger("pmx_format.writer")


class PMXWriter:
    """Serializes a PMXModel.

    Usage:
        writer = PMXWriter(model, version=2.1)
        writer.write("output.pmx")

    When ``header`` is omitted a best-fit header is synthesized from the
    model: narrowest index widths, the config's encoding, and ``version``
    (falling back to the config's version).
    """

    def __init__(self, model, version=None, config=None, header=None):
        self.model = model
        self.config = config if config is not None else CodecConfig()
        if header is None:
            header = PMXHeader.from_model(
                model,
                version=self.config.version if version is None else version,
                encoding=self.config.encoding,
            )
        self.header = header

    def to_bytes(self):
        buf = io.BytesIO()
        self.header.write(buf)
        self.model.write(self.header, buf)
        return buf.getvalue()

    def write(self, target):
        """Write the encoded model to a path or writable binary stream.

        Returns:
            the PMXHeader used for encoding
        """
        data = self.to_bytes()
        if isinstance(target, (str, bytes, os.PathLike)):
            path = os.fsdecode(target)
            try:
                if self.config.atomic_write:
                    _replace_file(path, data)
                else:
                    with open(path, "wb") as f:
                        f.write(data)
            except OSError as e:
                raise PMXIOError(f"Cannot write {path}: {e}") from e
            _log.debug("Wrote %d bytes to %s (%r)", len(data), path, self.header)
        else:
            try:
                target.write(data)
            except OSError as e:
                raise PMXIOError(f"Stream write failed: {e}") from e
        return self.header


def _target_mode(path):
    """Permission bits a plain ``open(path, "wb")`` would leave on ``path``."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _replace_file(path, data):
    """Write ``data`` to a sibling temporary file, then move it over ``path``."""
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(
        prefix=os.path.basename(path) + ".", suffix=".tmp", dir=directory
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


def write_pmx(target, model, version=None, config=None):
    """Write ``model`` to a path or binary stream with a synthesized header.

    ``version`` defaults to the config's version (2.0 unless configured).

    Returns:
        the PMXHeader that was written
    """
    return PMXWriter(model, version=version, config=config).write(target)


def dumps(model, version=None, config=None):
    """Encode ``model`` to bytes with a synthesized header."""
    return PMXWriter(model, version=version, config=config).to_bytes()
