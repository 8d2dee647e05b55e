"""Binary PPM (P6) serialization."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

import numpy as np

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
PixelBuffer = Union[bytes, bytearray, memoryview, np.ndarray]


class BufferSizeError(ValueError):
    """The pixel buffer does not hold exactly width * height RGB triplets."""


def _as_bytes(pixels: PixelBuffer) -> bytes:
    if isinstance(pixels, np.ndarray):
        return np.ascontiguousarray(pixels, dtype=np.uint8).tobytes()
    return bytes(pixels)


def _current_umask() -> int:
    # os.umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask


def header(width: int, height: int) -> bytes:
    return f"P6 {width} {height} 255\n".encode("ascii")


def encode_ppm(width: int, height: int, pixels: PixelBuffer) -> bytes:
    """Return the complete P6 stream for a row-major RGB byte buffer."""
    data = _as_bytes(pixels)
    expected = width * height * 3
    if len(data) != expected:
        raise BufferSizeError(
            f"Pixel buffer for a {width}x{height} image must be {expected} bytes, got {len(data)}"
        )
    return header(width, height) + data


def write_ppm(path: PathLike, width: int, height: int, pixels: PixelBuffer) -> Path:
    """Write the image to path in one piece.

    The stream is encoded fully in memory, written to a temporary file next
    to the target and moved over it, so readers never see a partial image.
    OSError from the filesystem propagates to the caller.
    """
    path = Path(path)
    payload = encode_ppm(width, height, pixels)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(payload)
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info("Wrote %dx%d image (%d bytes) to %s", width, height, len(payload), path)
    return path
