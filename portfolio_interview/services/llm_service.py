from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import base64
import json
import logging
import re

import anyio
from groq import Groq
try:
	import google.generativeai as genai
except ImportError:
	genai = None

from portfolio_interview.config import settings
from portfolio_interview.services.errors import LLMNotConfiguredError, LLMResponseError


logger = logging.getLogger(__name__)

ChatMessage = Dict[str, Any]

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?")
_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+/-]+);base64,(?P<data>.+)$", re.DOTALL)


@dataclass
class Completion:
	text: str
	finish_reason: Optional[str] = None

	@property
	def filtered(self) -> bool:
		return self.finish_reason == "content_filter"


def text_part(text: str) -> Dict[str, Any]:
	return {"type": "text", "text": text}


def image_part(mime_type: str, b64: str) -> Dict[str, Any]:
	"""OpenAI-style image content part carrying an inline data URL."""
	return {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{b64}"}}


def strip_code_fences(text: str) -> str:
	return _FENCE_RE.sub("", text or "").strip()


def parse_json_reply(text: str) -> Dict[str, Any]:
	"""Parse a JSON object from a model reply that may be wrapped in markdown fences."""
	cleaned = strip_code_fences(text)
	try:
		data = json.loads(cleaned)
	except json.JSONDecodeError:
		# Models sometimes add a sentence around the object
		start, end = cleaned.find("{"), cleaned.rfind("}")
		if start == -1 or end <= start:
			raise LLMResponseError(f"Model reply is not JSON: {text[:200]!r}")
		try:
			data = json.loads(cleaned[start:end + 1])
		except json.JSONDecodeError as exc:
			raise LLMResponseError(f"Model reply is not JSON: {text[:200]!r}") from exc
	if not isinstance(data, dict):
		raise LLMResponseError("Model reply is JSON but not an object")
	return data


_GEMINI_FINISH_REASONS = {
	"STOP": "stop",
	"MAX_TOKENS": "length",
	"SAFETY": "content_filter",
	"RECITATION": "content_filter",
	"BLOCKLIST": "content_filter",
	"PROHIBITED_CONTENT": "content_filter",
	"SPII": "content_filter",
}


class LLMService:
	def __init__(self) -> None:
		self._client: Groq | None = None

	@property
	def provider(self) -> str:
		return (settings.llm_provider or "groq").lower()

	def _ensure_client(self):
		provider = self.provider
		if provider == "groq":
			api_key = settings.groq_api_key
			if not api_key:
				self._client = None
				return None
			if self._client is None or not isinstance(self._client, Groq):
				self._client = Groq(api_key=api_key)
			return self._client
		elif provider == "gemini":
			if genai is None:
				return None
			api_key = settings.gemini_api_key
			if not api_key:
				return None
			# For gemini we return a configured module handle to keep usage simple
			genai.configure(api_key=api_key)
			return genai
		else:
			return None

	@property
	def enabled(self) -> bool:
		provider = self.provider
		if provider == "groq":
			return bool(settings.groq_api_key)
		if provider == "gemini":
			return genai is not None and bool(settings.gemini_api_key)
		return False

	def model_name(self, *, vision: bool = False) -> str:
		if self.provider == "gemini":
			return settings.gemini_model
		return settings.groq_vision_model if vision else settings.groq_chat_model

	async def chat(
		self,
		messages: List[ChatMessage],
		*,
		temperature: float,
		max_tokens: int,
		vision: bool = False,
	) -> Completion:
		"""Run one chat completion on the configured provider.

		Messages use the OpenAI shape; content is either a string or a list of
		text/image_url parts. The blocking SDK call runs in a worker thread.
		"""
		client = self._ensure_client()
		if client is None:
			raise LLMNotConfiguredError(f"LLM provider '{self.provider}' is not configured")

		provider = self.provider
		model = self.model_name(vision=vision)

		def _call() -> Completion:
			if provider == "groq":
				resp = client.chat.completions.create(
					model=model,
					messages=messages,
					temperature=temperature,
					max_tokens=max_tokens,
				)
				choice = resp.choices[0]
				return Completion(text=(choice.message.content or "").strip(), finish_reason=choice.finish_reason)
			system_instruction, contents = _to_gemini_contents(messages)
			gmodel = client.GenerativeModel(model, system_instruction=system_instruction or None)
			resp = gmodel.generate_content(
				contents,
				generation_config={"temperature": temperature, "max_output_tokens": max_tokens},
			)
			return _gemini_completion(resp)

		logger.debug("LLM call provider=%s model=%s messages=%d", provider, model, len(messages))
		result = await anyio.to_thread.run_sync(_call)
		logger.info("LLM call done provider=%s model=%s finish=%s chars=%d", provider, model, result.finish_reason, len(result.text))
		return result


def _decode_data_url(url: str) -> Dict[str, Any]:
	match = _DATA_URL_RE.match(url)
	if match is None:
		raise LLMResponseError("Only inline data URLs are supported for images")
	return {"mime_type": match.group("mime"), "data": base64.b64decode(match.group("data"))}


def _to_gemini_contents(messages: List[ChatMessage]) -> tuple[str, List[Dict[str, Any]]]:
	"""Split OpenAI-shaped messages into a Gemini system instruction and contents."""
	system_parts: List[str] = []
	contents: List[Dict[str, Any]] = []
	for message in messages:
		content = message.get("content")
		if message.get("role") == "system":
			system_parts.append(content if isinstance(content, str) else "")
			continue
		parts: List[Any] = []
		if isinstance(content, str):
			parts.append(content)
		else:
			for part in content or []:
				if part.get("type") == "text":
					parts.append(part["text"])
				elif part.get("type") == "image_url":
					parts.append(_decode_data_url(part["image_url"]["url"]))
		role = "model" if message.get("role") == "assistant" else "user"
		contents.append({"role": role, "parts": parts})
	return "\n\n".join(system_parts), contents


def _gemini_completion(resp) -> Completion:
	feedback = getattr(resp, "prompt_feedback", None)
	if feedback is not None and getattr(feedback, "block_reason", None):
		return Completion(text="", finish_reason="content_filter")
	candidates = getattr(resp, "candidates", None) or []
	if not candidates:
		return Completion(text="", finish_reason=None)
	candidate = candidates[0]
	reason = getattr(candidate.finish_reason, "name", str(candidate.finish_reason))
	parts = getattr(candidate.content, "parts", None) or []
	text = "".join(getattr(p, "text", "") for p in parts)
	return Completion(text=text.strip(), finish_reason=_GEMINI_FINISH_REASONS.get(reason, reason.lower()))


llm_service = LLMService()
