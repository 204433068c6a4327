from __future__ import annotations

from io import BytesIO
import logging


logger = logging.getLogger(__name__)


def extract_text_from_pdf(data: bytes) -> str:
	"""Extract text from PDF bytes.

	Strategy:
	1) Try PyPDF2 (fast, works on many text PDFs)
	2) Fallback to pdfminer.six (more robust)
	Returns empty string on failure so callers can fall back to page rendering.
	"""
	from PyPDF2 import PdfReader
	from PyPDF2.errors import PdfReadError

	try:
		reader = PdfReader(BytesIO(data))
		parts: list[str] = []
		for page in reader.pages:
			text = page.extract_text() or ""
			if text.strip():
				parts.append(text.strip())
		if parts:
			return "\n\n".join(parts)
	except (PdfReadError, ValueError, KeyError) as exc:
		logger.info("PyPDF2 could not read PDF (%s); trying pdfminer", exc)

	from pdfminer.high_level import extract_text
	from pdfminer.pdfparser import PDFSyntaxError
	from pdfminer.psparser import PSException

	try:
		return (extract_text(BytesIO(data)) or "").strip()
	except (PDFSyntaxError, PSException, ValueError) as exc:
		logger.warning("pdfminer could not read PDF: %s", exc)
		return ""


def render_pdf_pages(data: bytes, dpi: int = 110, max_pages: int | None = None) -> list[bytes]:
	"""Render PDF pages to PNG bytes with PyMuPDF, for scans without a text layer."""
	import fitz  # PyMuPDF

	images: list[bytes] = []
	document = fitz.open(stream=data, filetype="pdf")
	try:
		# Default PDF resolution is 72 DPI
		zoom = dpi / 72.0
		matrix = fitz.Matrix(zoom, zoom)
		for page_num in range(len(document)):
			if max_pages is not None and page_num >= max_pages:
				break
			pix = document[page_num].get_pixmap(matrix=matrix)
			images.append(pix.tobytes("png"))
	finally:
		document.close()
	return images
