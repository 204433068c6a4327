from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, TypeVar
import logging

import anyio

from portfolio_interview.config import settings
from portfolio_interview.schemas import UploadedFile
from portfolio_interview.services import prompts
from portfolio_interview.services.document_service import PreparedDocument, PreparedImage, prepare_files
from portfolio_interview.services.llm_service import ChatMessage, image_part, llm_service, text_part


logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
	if size < 1:
		raise ValueError("chunk size must be positive")
	return [list(items[i:i + size]) for i in range(0, len(items), size)]


def build_analysis_messages(images: Sequence[PreparedImage], text: Optional[str] = None) -> List[ChatMessage]:
	"""Messages for one analysis call: optional document text plus up to one batch of images."""
	if images:
		intro = prompts.ANALYSIS_IMAGES_INTRO if len(images) > 1 else prompts.ANALYSIS_IMAGE_INTRO
	else:
		intro = prompts.ANALYSIS_TEXT_INTRO
	content: List[Dict[str, Any]] = [text_part(intro)]
	if text:
		content.append(text_part(text))
	for image in images:
		content.append(image_part(image.mime_type, image.b64))
	return [
		{"role": "system", "content": prompts.ANALYSIS_SYSTEM_PROMPT},
		{"role": "user", "content": content},
	]


def merge_partial_analyses(parts: Sequence[str]) -> str:
	if len(parts) == 1:
		return parts[0]
	return "\n\n".join(f"### Part {i}\n{part.strip()}" for i, part in enumerate(parts, start=1))


async def analyze_document(document: PreparedDocument) -> str:
	"""Summarise a prepared document with one analysis call per image batch.

	Batches run concurrently; results keep batch order. Document text rides
	along with the first call.
	"""
	text = document.combined_text or None
	batches = chunked(document.images, settings.image_batch_size) if document.images else [[]]
	results: List[str] = [""] * len(batches)
	errors: Dict[int, Exception] = {}

	async def _run(index: int, batch: List[PreparedImage]) -> None:
		messages = build_analysis_messages(batch, text if index == 0 else None)
		try:
			completion = await llm_service.chat(
				messages,
				temperature=settings.analysis_temperature,
				max_tokens=settings.analysis_max_tokens,
				vision=bool(batch),
			)
		except Exception as exc:
			# Collected so callers see the original error type, not an ExceptionGroup
			errors[index] = exc
			return
		results[index] = completion.text

	logger.info("Analysing portfolio in %d batch(es)", len(batches))
	async with anyio.create_task_group() as tg:
		for index, batch in enumerate(batches):
			tg.start_soon(_run, index, batch)
	if errors:
		first = min(errors)
		logger.error("Analysis batch %d of %d failed: %s", first + 1, len(batches), errors[first])
		raise errors[first]
	return merge_partial_analyses(results)


async def analyze_portfolio(files: Sequence[UploadedFile]) -> str:
	# Pillow and PDF parsing are CPU bound; keep them off the event loop
	document = await anyio.to_thread.run_sync(prepare_files, list(files))
	return await analyze_document(document)
