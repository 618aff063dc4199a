import io
import logging
import math
from typing import Iterable, List, NamedTuple, Optional, Protocol, Sequence

import fitz  # PyMuPDF
from PyPDF2 import PdfReader

from errors import DecodeError, DecoderUnavailableError

logger = logging.getLogger(__name__)

# Max baseline drift (PDF units) for two fragments to share a line
LINE_TOLERANCE = 2


class TextItem(NamedTuple):
    """A positioned string fragment as emitted by a PDF decoder."""
    text: str
    baseline: float


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def reconstruct_page(items: Iterable[TextItem]) -> str:
    """
    Rebuild visual lines from one page's fragments, in emission order.

    A new line starts whenever the rounded baseline moves by more than
    LINE_TOLERANCE from the previous fragment's. Fragments with blank text
    add nothing but still move the tracked baseline. Every emitted line is
    stripped and terminated by a newline.
    """
    output = []
    current_y: Optional[int] = None
    line = ""

    for item in items:
        y = _round_half_up(item.baseline)

        if current_y is not None and abs(current_y - y) > LINE_TOLERANCE:
            if line.strip():
                output.append(line.strip() + "\n")
            line = ""

        if item.text.strip():
            line += (" " if line else "") + item.text

        current_y = y

    if line.strip():
        output.append(line.strip() + "\n")

    return "".join(output)


def reconstruct_text(pages: Iterable[Iterable[TextItem]]) -> str:
    """Join the reconstructed pages in order and trim the result."""
    return "".join(reconstruct_page(items) for items in pages).strip()


class PdfDecoder(Protocol):
    name: str

    def read_pages(self, data: bytes) -> List[List[TextItem]]:
        ...


class PyMuPDFDecoder:
    """Primary decoder: spans from PyMuPDF's text dict, baseline = span origin y."""

    name = "pymupdf"

    def __init__(self, self_test: bool = True):
        if self_test:
            self._self_test()

    def _self_test(self):
        probe = fitz.open()
        try:
            probe.new_page().insert_text((72, 72), "probe")
            data = probe.tobytes()
        finally:
            probe.close()
        if reconstruct_text(self.read_pages(data)) != "probe":
            raise RuntimeError("PyMuPDF self-test produced unexpected text")

    def read_pages(self, data: bytes) -> List[List[TextItem]]:
        doc = fitz.open(stream=data, filetype="pdf")
        try:
            if doc.needs_pass:
                raise ValueError("document is password protected")
            pages = []
            for page in doc:
                items = []
                for block in page.get_text("dict").get("blocks", []):
                    for line in block.get("lines", []):
                        for span in line.get("spans", []):
                            items.append(TextItem(span.get("text", ""), float(span["origin"][1])))
                pages.append(items)
            return pages
        finally:
            doc.close()


class PyPDF2Decoder:
    """Fallback decoder: fragments from PyPDF2's text visitor, baseline = y of tm x cm."""

    name = "pypdf2"

    def read_pages(self, data: bytes) -> List[List[TextItem]]:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            raise ValueError("document is encrypted")
        pages = []
        for page in reader.pages:
            items: List[TextItem] = []

            def visit(text, cm, tm, font_dict, font_size, items=items):
                y = tm[4] * cm[1] + tm[5] * cm[3] + cm[5]
                items.append(TextItem(text or "", float(y)))

            page.extract_text(visitor_text=visit)
            pages.append(items)
        return pages


class FallbackDecoder:
    """Tries each decoder in turn on the whole document; first success wins."""

    def __init__(self, decoders: Sequence[PdfDecoder]):
        if not decoders:
            raise DecoderUnavailableError("no PDF decoder available")
        self.decoders = list(decoders)
        self.name = "+".join(d.name for d in self.decoders)

    def read_pages(self, data: bytes) -> List[List[TextItem]]:
        last_error: Optional[Exception] = None
        for decoder in self.decoders:
            try:
                return decoder.read_pages(data)
            except Exception as e:
                logger.warning(f"[WARN] {decoder.name} extraction failed: {e}")
                last_error = e
        raise DecodeError(f"Failed to extract text from PDF: {last_error}")


def init_pdf_decoder() -> FallbackDecoder:
    """
    Build the PDF decoding capability once at startup.

    Returns a decoder using PyMuPDF with PyPDF2 as fallback. Raises
    DecoderUnavailableError if neither backend can be set up.
    """
    decoders: List[PdfDecoder] = []
    for factory in (PyMuPDFDecoder, PyPDF2Decoder):
        try:
            decoders.append(factory())
        except Exception as e:
            logger.warning(f"PDF backend {factory.name} unavailable: {e}")
    decoder = FallbackDecoder(decoders)
    logger.info(f"PDF decoder ready: {decoder.name}")
    return decoder


def extract_pdf_text(data: bytes, decoder: PdfDecoder) -> str:
    """Extract line-reconstructed text from PDF bytes. Raises DecodeError, never returns partial text."""
    try:
        pages = decoder.read_pages(data)
    except DecodeError:
        raise
    except Exception as e:
        logger.error(f"[ERROR] PDF extraction failed: {e}")
        raise DecodeError(f"Failed to extract text from PDF: {e}") from e

    text = reconstruct_text(pages)
    logger.info(f"Extracted {len(text)} characters from {len(pages)} page(s) via {decoder.name}")
    return text
