from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import base64
import binascii
import logging

from portfolio_interview.config import settings
from portfolio_interview.schemas import UploadedFile
from portfolio_interview.services.errors import DocumentError, UnsupportedDocumentError
from portfolio_interview.utils.images import ImageProcessingError, resize_and_compress, size_mb
from portfolio_interview.utils.text_extract import extract_text_from_pdf, render_pdf_pages


logger = logging.getLogger(__name__)

_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp")
# Pillow has no HEIC/HEIF decoder
_UNDECODABLE_IMAGES = (".heic", ".heif", "image/heic", "image/heif")


@dataclass
class PreparedImage:
	name: str
	b64: str
	mime_type: str = "image/jpeg"
	size_bytes: int = 0


@dataclass
class PreparedDocument:
	"""Analysable content of one upload: text blocks and compressed images, in upload order."""

	texts: List[tuple[str, str]] = field(default_factory=list)
	images: List[PreparedImage] = field(default_factory=list)

	@property
	def is_empty(self) -> bool:
		return not self.texts and not self.images

	@property
	def combined_text(self) -> str:
		return "\n\n".join(f"[{name}]\n{text}" for name, text in self.texts)

	@property
	def total_image_mb(self) -> float:
		return sum(i.size_bytes for i in self.images) / (1024 * 1024)


def decode_base64(payload: str, name: str) -> bytes:
	# Tolerate clients that send a full data URL
	if payload.startswith("data:") and "," in payload:
		payload = payload.split(",", 1)[1]
	try:
		return base64.b64decode(payload, validate=True)
	except (binascii.Error, ValueError) as exc:
		raise DocumentError(f"{name}: payload is not valid base64") from exc


def compress_image(data: bytes, name: str) -> PreparedImage:
	try:
		compressed = resize_and_compress(data, settings.image_max_side, settings.image_jpeg_quality)
	except ImageProcessingError as exc:
		raise DocumentError(f"{name}: {exc}") from exc
	mb = size_mb(compressed)
	logger.debug("%s compressed to %.2fMB", name, mb)
	if mb > settings.max_image_mb:
		raise DocumentError(f"{name}: file is too large ({mb:.2f}MB after compression). Please use a smaller image.")
	return PreparedImage(name=name, b64=base64.b64encode(compressed).decode("ascii"), size_bytes=len(compressed))


def pdf_to_content(data: bytes, name: str) -> tuple[Optional[str], List[PreparedImage]]:
	"""Text when the PDF has a usable text layer, otherwise rendered page images."""
	text = extract_text_from_pdf(data)
	if len(text.strip()) >= settings.pdf_min_text_chars:
		return text.strip(), []
	logger.info("%s has no usable text layer (%d chars); rendering pages", name, len(text.strip()))
	try:
		pages = render_pdf_pages(data, dpi=settings.pdf_render_dpi, max_pages=settings.pdf_max_pages)
	except RuntimeError as exc:
		# PyMuPDF raises FileDataError (a RuntimeError) on corrupt input
		raise DocumentError(f"{name}: unreadable PDF") from exc
	if not pages:
		raise DocumentError(f"{name}: PDF has no pages")
	images = [compress_image(page, f"{name} p.{i}") for i, page in enumerate(pages, start=1)]
	return None, images


def prepare_files(files: Sequence[UploadedFile]) -> PreparedDocument:
	"""Turn request files into analysable text and images.

	Files that already carry extracted text skip payload decoding entirely.
	"""
	document = PreparedDocument()
	for file in files:
		if file.extracted_text and file.extracted_text.strip():
			document.texts.append((file.name, file.extracted_text.strip()))
			continue
		if not file.base64:
			raise DocumentError(f"{file.name}: file has neither content nor extracted text")
		data = decode_base64(file.base64, file.name)
		if file.type == "pdf":
			text, images = pdf_to_content(data, file.name)
			if text:
				document.texts.append((file.name, text))
			document.images.extend(images)
		else:
			document.images.append(compress_image(data, file.name))

	if document.images and document.total_image_mb > settings.max_total_image_mb:
		raise DocumentError(
			f"Total size after compression is {document.total_image_mb:.2f}MB. "
			"Select fewer images or use lower resolution ones."
		)
	if document.is_empty:
		raise DocumentError("No analysable content in the uploaded files")
	logger.info("Prepared document: %d text block(s), %d image(s)", len(document.texts), len(document.images))
	return document


def detect_file_type(filename: str, content_type: str) -> str:
	filename = (filename or "").lower()
	content_type = (content_type or "").lower()
	if content_type == "application/pdf" or filename.endswith(".pdf"):
		return "pdf"
	if content_type in _UNDECODABLE_IMAGES or filename.endswith(_UNDECODABLE_IMAGES):
		raise UnsupportedDocumentError("HEIC images are not supported. Please convert to JPEG or PNG.")
	if content_type.startswith("image/") or filename.endswith(_IMAGE_EXTENSIONS):
		return "image"
	raise UnsupportedDocumentError("Unsupported file type. Please upload an image or a PDF.")


def ingest_upload(filename: str, content_type: str, data: bytes) -> UploadedFile:
	"""Convert a raw multipart upload into an UploadedFile ready for /api/analyze."""
	if not data:
		raise DocumentError("Uploaded file appears empty.")
	kind = detect_file_type(filename, content_type)
	name = filename or "upload"
	if kind == "image":
		image = compress_image(data, name)
		return UploadedFile(name=name, type="image", mime_type=image.mime_type, base64=image.b64)

	text, images = pdf_to_content(data, name)
	if text:
		return UploadedFile(name=name, type="pdf", mime_type="application/pdf", extracted_text=text)
	# Scanned PDF: keep the original so the analysis step renders it again
	return UploadedFile(
		name=name,
		type="pdf",
		mime_type="application/pdf",
		base64=base64.b64encode(data).decode("ascii"),
	)
