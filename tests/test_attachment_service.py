"""
Unit tests for the attachment encoder

Tests for source/binary classification and file encoding.
"""

import sys
from pathlib import Path
import base64
import tempfile

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from services.attachment_service import (
    DEFAULT_MIME_TYPE,
    encode_file,
    guess_mime_type,
    is_source_file,
)


PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestIsSourceFile:
    """Test classification of uploads"""

    @pytest.mark.parametrize("name", ["Main.java", "app.py", "prog.C", "lib.cpp", "index.ts", "notes.txt"])
    def test_known_extensions(self, name):
        assert is_source_file(name)

    def test_text_mime_prefix(self):
        assert is_source_file("Makefile", "text/x-makefile")

    @pytest.mark.parametrize("name,mime", [
        ("photo.jpg", "image/jpeg"),
        ("homework.pdf", "application/pdf"),
        ("blob", None),
    ])
    def test_binary_files(self, name, mime):
        assert not is_source_file(name, mime)


class TestEncodeFile:
    """Test reading uploads from disk"""

    def test_source_file_returns_text(self, tmp_dir):
        path = tmp_dir / "Main.java"
        path.write_text("int a = 10\n", encoding="utf-8")

        encoded = encode_file(path)

        assert encoded.is_source
        assert encoded.text == "int a = 10\n"
        assert encoded.attachment is None

    def test_undecodable_bytes_are_replaced(self, tmp_dir):
        path = tmp_dir / "broken.c"
        path.write_bytes(b"int x = 1; \xff\n")

        encoded = encode_file(path)

        assert encoded.text.startswith("int x = 1;")
        assert "�" in encoded.text

    def test_image_becomes_attachment(self, tmp_dir):
        path = tmp_dir / "snap.png"
        path.write_bytes(PNG_BYTES)

        encoded = encode_file(path)

        assert not encoded.is_source
        assert encoded.attachment.name == "snap.png"
        assert encoded.attachment.mime_type == "image/png"
        assert base64.b64decode(encoded.attachment.data) == PNG_BYTES

    def test_explicit_mime_type_wins(self, tmp_dir):
        path = tmp_dir / "capture"
        path.write_bytes(PNG_BYTES)

        encoded = encode_file(path, mime_type="image/webp")

        assert encoded.attachment.mime_type == "image/webp"

    def test_unknown_type_falls_back(self, tmp_dir):
        path = tmp_dir / "data.unknownext"
        path.write_bytes(b"\x00\x01")

        encoded = encode_file(path)

        assert encoded.attachment.mime_type == DEFAULT_MIME_TYPE

    def test_missing_file_raises(self, tmp_dir):
        with pytest.raises(OSError):
            encode_file(tmp_dir / "nope.png")

    def test_guess_mime_type(self):
        assert guess_mime_type("a.pdf") == "application/pdf"
        assert guess_mime_type("noext") == DEFAULT_MIME_TYPE
