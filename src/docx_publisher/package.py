"""Access to the parts of a .docx container."""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from dataclasses import dataclass
from typing import Optional

from docx_publisher.exceptions import DocumentOpenError

logger = logging.getLogger(__name__)

DOCUMENT_PART = "word/document.xml"
NUMBERING_PART = "word/numbering.xml"


@dataclass
class DocxPackage:
    """The raw bytes of a .docx file and the XML parts the converter reads."""

    raw: bytes
    document_xml: bytes
    numbering_xml: Optional[bytes] = None

    @classmethod
    def open(cls, data: bytes) -> DocxPackage:
        """Open a .docx archive held in memory.

        Raises:
            DocumentOpenError: If the data is not a zip archive or has no
                main document part.
        """
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                names = set(archive.namelist())
                if DOCUMENT_PART not in names:
                    raise DocumentOpenError(
                        f"Archive has no {DOCUMENT_PART} part"
                    )
                document_xml = archive.read(DOCUMENT_PART)
                numbering_xml = (
                    archive.read(NUMBERING_PART) if NUMBERING_PART in names else None
                )
        except zipfile.BadZipFile as exc:
            raise DocumentOpenError(f"Not a valid .docx archive: {exc}") from exc
        except (zlib.error, NotImplementedError, RuntimeError, EOFError) as exc:
            raise DocumentOpenError(f"Cannot read .docx archive: {exc}") from exc

        logger.debug(
            "Opened package: document %d bytes, numbering %s",
            len(document_xml),
            "absent" if numbering_xml is None else f"{len(numbering_xml)} bytes",
        )
        return cls(raw=data, document_xml=document_xml, numbering_xml=numbering_xml)
