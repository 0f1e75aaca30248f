import io
import zipfile
from collections.abc import Callable

import pytest
from PIL import Image

ZipBuilder = Callable[[list[tuple[str, bytes]]], bytes]


def build_zip(members: list[tuple[str, bytes]]) -> bytes:
    """Build an in-memory ZIP archive; members keep the given order."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as archive:
        for path, data in members:
            archive.writestr(path, data)
    return buf.getvalue()


@pytest.fixture()
def make_zip() -> ZipBuilder:
    return build_zip


@pytest.fixture()
def whatsapp_export_bytes() -> bytes:
    """An iOS-style export: chat text, two voice notes, one photo, OS metadata."""
    return build_zip(
        [
            ("_chat.txt", "[01/02/24, 10:00:00] Cliente: Oi, tem o modelo azul?\n".encode()),
            ("PTT-20240201-WA0001.opus", b"OggS-voice-1"),
            ("IMG-20240201-WA0002.jpg", b"\xff\xd8\xff-photo"),
            ("PTT-20240201-WA0003.mp3", b"ID3-voice-2"),
            ("__MACOSX/._PTT-20240201-WA0001.opus", b"apple-double"),
            (".DS_Store", b"finder"),
        ]
    )


@pytest.fixture()
def png_bytes() -> bytes:
    """A small valid PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), color="white").save(buf, format="PNG")
    return buf.getvalue()
