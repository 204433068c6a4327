from __future__ import annotations

from io import BytesIO
from typing import Callable, List, Optional
import base64

import pytest
from PIL import Image

from portfolio_interview.config import settings
from portfolio_interview.schemas import Company
from portfolio_interview.services.llm_service import Completion, llm_service


class FakeLLM:
	"""Stands in for LLMService.chat; records every call and replays canned replies."""

	def __init__(self) -> None:
		self.calls: List[dict] = []
		self.replies: List[Completion] = []
		self.responder: Optional[Callable[[list], Completion]] = None

	def queue(self, *texts: str, finish_reason: str = "stop") -> None:
		for text in texts:
			self.replies.append(Completion(text=text, finish_reason=finish_reason))

	async def chat(self, messages, *, temperature, max_tokens, vision=False):
		self.calls.append({
			"messages": messages,
			"temperature": temperature,
			"max_tokens": max_tokens,
			"vision": vision,
		})
		if self.responder is not None:
			return self.responder(messages)
		if not self.replies:
			raise AssertionError("FakeLLM has no queued reply")
		return self.replies.pop(0)


@pytest.fixture
def fake_llm(monkeypatch) -> FakeLLM:
	fake = FakeLLM()
	monkeypatch.setattr(llm_service, "chat", fake.chat)
	return fake


@pytest.fixture
def anyio_backend():
	return "asyncio"


@pytest.fixture(autouse=True)
def _no_api_key(monkeypatch):
	monkeypatch.setattr(settings, "api_key", None)


def make_image_bytes(width: int = 1600, height: int = 900, color=(30, 120, 220), fmt: str = "PNG", mode: str = "RGB") -> bytes:
	buf = BytesIO()
	Image.new(mode, (width, height), color).save(buf, format=fmt)
	return buf.getvalue()


def make_pdf_bytes(text: Optional[str] = None) -> bytes:
	import fitz

	doc = fitz.open()
	page = doc.new_page()
	if text:
		page.insert_text((72, 72), text, fontsize=11)
	data = doc.tobytes()
	doc.close()
	return data


@pytest.fixture
def image_b64() -> str:
	return base64.b64encode(make_image_bytes()).decode("ascii")


@pytest.fixture
def company() -> Company:
	return Company(
		id="acme",
		name="Acme",
		industry="Fintech",
		interview_focus=["User experience", "Data-driven thinking"],
		portfolio_tips=["Show metrics", "Explain trade-offs"],
		common_questions=["Why this design?"],
	)
