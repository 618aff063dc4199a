import logging
from typing import Optional

from errors import DecodeError, DecoderUnavailableError, InputValidationError
from parsers.pdf import PdfDecoder, extract_pdf_text

logger = logging.getLogger(__name__)

TEXT_ENCODINGS = ("utf-8", "cp1252", "latin-1")


def read_txt(data: bytes) -> str:
    """Decode a plain-text upload verbatim, trying the supported encodings in order."""
    for encoding in TEXT_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise DecodeError("Unable to decode file with supported encodings")


def is_pdf(filename: str, content_type: Optional[str]) -> bool:
    return content_type == "application/pdf" or filename.lower().endswith(".pdf")


def is_text(filename: str, content_type: Optional[str]) -> bool:
    return bool(content_type and content_type.startswith("text/")) or filename.lower().endswith(".txt")


def read_resume_file(filename: str, data: bytes, content_type: Optional[str] = None,
                     decoder: Optional[PdfDecoder] = None) -> str:
    """Return resume text from an uploaded TXT or PDF file."""
    if is_pdf(filename, content_type):
        if decoder is None:
            raise DecoderUnavailableError("PDF decoder was not initialized")
        return extract_pdf_text(data, decoder)
    if is_text(filename, content_type):
        return read_txt(data)

    logger.warning(f"Rejected upload {filename!r} with type {content_type!r}")
    raise InputValidationError(
        f"Unsupported file type: {content_type or filename}",
        user_message="Unsupported file type. Please upload a TXT or PDF file.",
    )
