import os
import stat
import sys

import numpy as np
import pytest

from spheretracer import BufferSizeError, Settings
from spheretracer.cpu_rt import CpuApp
from spheretracer.ppm import encode_ppm, header, write_ppm


def test_header_for_default_size():
    assert header(800, 600) == b"P6 800 600 255\n"


def test_default_app_buffer_size():
    app = CpuApp(Settings())
    assert len(app.pixels()) == 800 * 600 * 3 == 1_440_000


def test_encode_layout():
    pixels = bytes(range(12))
    data = encode_ppm(2, 2, pixels)

    assert data == b"P6 2 2 255\n" + pixels


def test_encode_accepts_image_array():
    image = np.zeros((2, 3, 3), dtype=np.uint8)
    image[0, 0] = [255, 0, 0]
    image[1, 2] = [0, 0, 255]

    data = encode_ppm(3, 2, image)
    body = data[len(b"P6 3 2 255\n"):]

    assert len(body) == 18
    # row-major: first pixel, then last pixel of the second row
    assert body[:3] == b"\xff\x00\x00"
    assert body[-3:] == b"\x00\x00\xff"


@pytest.mark.parametrize("size", [0, 11, 13, 36])
def test_wrong_buffer_size_is_rejected(size):
    with pytest.raises(BufferSizeError, match="must be 12 bytes"):
        encode_ppm(2, 2, bytes(size))


def test_buffer_size_error_is_value_error():
    assert issubclass(BufferSizeError, ValueError)


def test_write_ppm(tmp_path):
    target = tmp_path / "image.ppm"
    pixels = bytes([10, 20, 30]) * 6

    assert write_ppm(target, 3, 2, pixels) == target
    assert target.read_bytes() == b"P6 3 2 255\n" + pixels
    assert [p.name for p in tmp_path.iterdir()] == ["image.ppm"]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_write_ppm_honours_umask(tmp_path):
    target = tmp_path / "image.ppm"
    previous = os.umask(0o022)
    try:
        write_ppm(target, 1, 1, b"\x00\x00\x00")
    finally:
        os.umask(previous)

    assert stat.S_IMODE(target.stat().st_mode) == 0o644


def test_write_ppm_replaces_existing_file(tmp_path):
    target = tmp_path / "image.ppm"
    target.write_bytes(b"stale")

    write_ppm(target, 1, 1, b"\x01\x02\x03")
    assert target.read_bytes() == b"P6 1 1 255\n\x01\x02\x03"


def test_write_ppm_wrong_size_writes_nothing(tmp_path):
    target = tmp_path / "image.ppm"
    with pytest.raises(BufferSizeError):
        write_ppm(target, 2, 2, b"\x00" * 3)
    assert list(tmp_path.iterdir()) == []


def test_write_ppm_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        write_ppm(tmp_path / "missing" / "image.ppm", 1, 1, b"\x00\x00\x00")


def test_app_save(tmp_path, single_sphere_world, small_settings):
    app = CpuApp(small_settings, single_sphere_world)
    app.render()
    target = app.save(tmp_path / "disc.ppm")

    data = target.read_bytes()
    assert data.startswith(b"P6 80 60 255\n")
    assert data[len(b"P6 80 60 255\n"):] == app.image.tobytes()
