"""PMX file reader.

Reads a PMX file (or any binary stream) into a PMXHeader and a PMXModel.
"""

import io
import logging
import os

from .pmx_errors import PMXIOError
from .pmx_header import PMXHeader
from .pmx_model import PMXModel


_log = logging.getLogger("pmx_format.reader")


class PMXReader:
    """Reads and parses a complete PMX file.

    Usage:
        reader = PMXReader("path/to/model.pmx")
        reader.read()
        # reader.header - PMXHeader
        # reader.model  - PMXModel

    ``source`` may also be an open binary stream; it is then read from its
    current position and left open.
    """

    def __init__(self, source):
        self.source = source
        self.header = None
        self.model = None

    def read(self):
        """Read the header, then the eleven model sections."""
        if isinstance(self.source, (str, bytes, os.PathLike)):
            try:
                with open(self.source, "rb") as f:
                    data = f.read()
            except OSError as e:
                raise PMXIOError(f"Cannot read {os.fsdecode(self.source)}: {e}") from e
            _log.debug("Read %d bytes from %s", len(data), os.fsdecode(self.source))
            self._parse(io.BytesIO(data))
        else:
            try:
                self._parse(self.source)
            except OSError as e:
                raise PMXIOError(f"Stream read failed: {e}") from e
        return self.header, self.model

    def _parse(self, stream):
        self.header = PMXHeader.read(stream)
        _log.debug("%r", self.header)
        self.model = PMXModel.read(self.header, stream)


def read_pmx(source):
    """Read a PMX model from a path or binary stream.

    Returns:
        (PMXHeader, PMXModel)
    """
    return PMXReader(source).read()


def loads(data):
    """Decode a PMX model from bytes. Returns (PMXHeader, PMXModel)."""
    return PMXReader(io.BytesIO(data)).read()
