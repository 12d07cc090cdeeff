import base64
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from core.models import Attachment

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = {
    ".py", ".java", ".c", ".cpp", ".cc", ".h", ".hpp", ".cs",
    ".js", ".jsx", ".ts", ".tsx", ".go", ".rb", ".php", ".rs",
    ".kt", ".swift", ".scala", ".m", ".sql", ".sh",
    ".html", ".css", ".json", ".xml", ".yaml", ".yml", ".txt", ".md",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(name: str) -> str:
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type or DEFAULT_MIME_TYPE


def is_source_file(name: str, mime_type: Optional[str] = None) -> bool:
    """True for files whose content should be read as code text."""
    if mime_type and mime_type.startswith("text/"):
        return True
    return Path(name).suffix.lower() in SOURCE_EXTENSIONS


@dataclass(frozen=True)
class EncodedFile:
    """Result of reading an upload: either code text or an attachment."""
    text: Optional[str] = None
    attachment: Optional[Attachment] = None

    @property
    def is_source(self) -> bool:
        return self.text is not None


def encode_file(path: Union[str, Path], mime_type: Optional[str] = None) -> EncodedFile:
    """
    Read an uploaded file.

    Source files come back as decoded text; anything else (images, PDFs,
    unknown binaries) is base64-encoded into an Attachment.
    """
    path = Path(path)
    mime_type = mime_type or guess_mime_type(path.name)
    raw = path.read_bytes()

    if is_source_file(path.name, mime_type):
        logger.info(f"📄 Loaded source file {path.name} ({len(raw)} bytes)")
        return EncodedFile(text=raw.decode("utf-8", errors="replace"))

    logger.info(f"📎 Encoded attachment {path.name} as {mime_type} ({len(raw)} bytes)")
    return EncodedFile(
        attachment=Attachment(
            name=path.name,
            mime_type=mime_type,
            data=base64.b64encode(raw).decode("ascii"),
        )
    )
