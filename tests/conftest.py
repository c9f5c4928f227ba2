import struct
import zlib
from pathlib import Path

import pytest

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


def raw_chunk(chunk_type: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + data) & 0xffffffff
    return struct.pack('>I', len(data)) + chunk_type + data + struct.pack('>I', crc)


def make_png(width=4, height=2, extra_chunks=(), trailing=b''):
    """
    PNG with the given IHDR size; extra_chunks are (type, data) pairs placed
    after IHDR. IDAT holds a single small scanline, nothing here decodes pixels.
    """
    ihdr = struct.pack('>IIBBBBB', width, height, 8, 2, 0, 0, 0)
    scanlines = b'\x00' + b'\x7f' * 12
    png = bytearray(PNG_SIGNATURE)
    png += raw_chunk(b'IHDR', ihdr)
    for chunk_type, data in extra_chunks:
        png += raw_chunk(chunk_type, data)
    png += raw_chunk(b'IDAT', zlib.compress(scanlines))
    png += raw_chunk(b'IEND', b'')
    png += trailing
    return bytes(png)


def itxt_data(keyword: str, text: str) -> bytes:
    return keyword.encode('latin-1') + b'\x00\x00\x00\x00\x00' + text.encode('utf-8')


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def png_file(tmp_path) -> Path:
    path = tmp_path / "VRChat_2023-05-01_12-00-00.000_1920x1080.png"
    path.write_bytes(make_png(1920, 1080))
    return path


@pytest.fixture
def write_png(tmp_path):
    """Write a PNG with an optional description into tmp_path."""
    def _write(name, description=None, **kwargs):
        extra = list(kwargs.pop('extra_chunks', ()))
        if description is not None:
            extra.insert(0, (b'iTXt', itxt_data('Description', description)))
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(make_png(extra_chunks=extra, **kwargs))
        return path
    return _write
