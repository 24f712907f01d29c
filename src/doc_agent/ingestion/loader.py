"""Text extraction — one file path in, plain text out.

Strategy per extension:

* ``.txt`` / ``.md`` — raw bytes decoded as text.
* ``.pdf`` — text layer via ``pypdf``; when that yields nothing (scanned
  documents) or fails, pages are rasterised with ``pdf2image`` and run
  through Tesseract.
* ``.png`` / ``.jpg`` / ``.jpeg`` — Tesseract directly.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytesseract
from pdf2image import convert_from_path
from pdf2image.exceptions import PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError
from pypdf import PdfReader

from doc_agent.errors import ExtractionError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = frozenset({".txt", ".md"})
PDF_EXTENSIONS = frozenset({".pdf"})
IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg"})
SUPPORTED_EXTENSIONS = TEXT_EXTENSIONS | PDF_EXTENSIONS | IMAGE_EXTENSIONS

OCR_PAGE_SEPARATOR = "\n"


def iter_supported_files(root: str | Path) -> Iterator[Path]:
    """Yield every file under *root* whose extension can be extracted.

    Files are yielded in sorted order so repeated runs are deterministic.
    """
    root = Path(root)
    if not root.is_dir():
        raise ExtractionError(f"not a directory: {root}", path=str(root))
    for path in sorted(root.rglob("*")):
        if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS:
            yield path


def extract_text(path: str | Path) -> str:
    """Return the plain text of *path*.

    Raises
    ------
    UnsupportedFileTypeError
        The extension is not one of :data:`SUPPORTED_EXTENSIONS`.
    ExtractionError
        The file is missing, empty, corrupt, or a required external tool
        (poppler, tesseract) is unavailable.
    """
    path = Path(path)
    ext = path.suffix.lower()

    if ext in TEXT_EXTENSIONS:
        text = read_text_file(path)
    elif ext in PDF_EXTENSIONS:
        text = extract_pdf_text(path)
    elif ext in IMAGE_EXTENSIONS:
        text = ocr_image(path)
    else:
        raise UnsupportedFileTypeError(f"unsupported file type: {ext or '<none>'}", path=str(path))

    if not text.strip():
        raise ExtractionError(f"no text extracted from {path}", path=str(path))
    return text


def read_text_file(path: Path) -> str:
    """Decode the file as UTF-8 without altering any character.

    Bytes that are not valid UTF-8 are an :class:`ExtractionError` rather
    than being replaced, so stored chunks always match the file.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ExtractionError(f"cannot read {path}: {exc}", path=str(path)) from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ExtractionError(f"{path} is not valid UTF-8 text: {exc}", path=str(path)) from exc


def extract_pdf_text(path: Path) -> str:
    """Text-layer extraction with an OCR fallback for scanned PDFs."""
    try:
        text = extract_pdf_text_layer(path)
    except Exception:  # noqa: BLE001 - pypdf raises many types on corrupt input
        logger.warning("Text-layer extraction failed for %s; falling back to OCR", path, exc_info=True)
        return ocr_pdf(path)

    if text.strip():
        return text
    logger.info("No text layer in %s; falling back to OCR", path)
    return ocr_pdf(path)


def extract_pdf_text_layer(path: Path) -> str:
    """Concatenate the embedded text of every page (may be empty)."""
    reader = PdfReader(str(path))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def ocr_pdf(path: Path) -> str:
    """Rasterise each page and OCR it.

    Pages that fail recognition are logged and skipped; whatever the
    remaining pages produced is returned.  Page images live in a temporary
    directory that is removed on exit, and each image is deleted as soon
    as it has been processed.
    """
    with tempfile.TemporaryDirectory(prefix="doc_agent_ocr_") as tmp_dir:
        try:
            pages = convert_from_path(
                str(path),
                output_folder=tmp_dir,
                fmt="png",
                paths_only=True,
            )
        except (PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError, OSError) as exc:
            raise ExtractionError(f"cannot render {path} to images: {exc}", path=str(path)) from exc

        texts: list[str] = []
        for page in pages:
            try:
                texts.append(ocr_image(Path(page)))
            except ExtractionError:
                logger.warning("OCR failed for page %s of %s", page, path, exc_info=True)
            finally:
                Path(page).unlink(missing_ok=True)

    return OCR_PAGE_SEPARATOR.join(texts).strip()


def ocr_image(path: Path) -> str:
    """Run Tesseract on a single image file."""
    try:
        text = pytesseract.image_to_string(str(path))
    except pytesseract.TesseractNotFoundError as exc:
        raise ExtractionError("tesseract is not installed or not on PATH", path=str(path)) from exc
    except (pytesseract.TesseractError, OSError, ValueError) as exc:
        raise ExtractionError(f"OCR failed for {path}: {exc}", path=str(path)) from exc
    return text.strip()
