import pytest
from PIL import Image
from fastapi.testclient import TestClient

from portfolio_interview.config import settings
from portfolio_interview.main import app
from portfolio_interview.services import prompts
from portfolio_interview.services.interview_service import FALLBACK_REPLY
from conftest import make_image_bytes


client = TestClient(app)


def _company():
	return {
		"id": "toss",
		"name": "Toss",
		"industry": "Fintech",
		"interviewFocus": ["User experience"],
		"portfolioTips": ["Explain the A/B tests"],
		"commonQuestions": ["Why should users use this?"],
	}


def _body(image_b64, **overrides):
	body = {
		"file": {"name": "shot.png", "type": "image", "mimeType": "image/png", "base64": image_b64},
		"company": _company(),
		"position": "designer",
		"experience": "junior",
		"conversationHistory": [],
	}
	body.update(overrides)
	return body


def test_health_reports_provider():
	res = client.get("/health")
	assert res.status_code == 200
	assert res.json()["llm"]["provider"] == settings.llm_provider


def test_first_turn_analyses_then_opens_interview(fake_llm, image_b64):
	fake_llm.queue("ANALYSIS: blue gradient hero, React", "Hello :) Nice to meet you. Why the blue gradient?")

	res = client.post("/api/analyze", json=_body(image_b64))

	assert res.status_code == 200, res.text
	assert res.json() == {
		"message": "Hello :) Nice to meet you. Why the blue gradient?",
		"portfolioAnalysis": "ANALYSIS: blue gradient hero, React",
	}
	analysis_call, turn_call = fake_llm.calls
	assert analysis_call["vision"] is True
	system, kickoff = turn_call["messages"]
	assert system["role"] == "system"
	assert system["content"].endswith("**Portfolio analysis:**\nANALYSIS: blue gradient hero, React")
	assert "applying to Toss" in system["content"]
	assert kickoff == {"role": "user", "content": prompts.build_kickoff_message(_company_model())}
	assert turn_call["temperature"] == settings.interview_temperature
	assert turn_call["max_tokens"] == settings.interview_max_tokens


def _company_model():
	from portfolio_interview.schemas import Company

	return Company.model_validate(_company())


def test_later_turn_replays_history_without_reanalysis(fake_llm, image_b64):
	fake_llm.queue("Why React over Vue?")
	history = [
		{"id": "1", "role": "assistant", "content": "Hi, tell me about the hero section."},
		{"id": "2", "role": "user", "content": "I used a gradient."},
	]

	res = client.post(
		"/api/analyze",
		json=_body(image_b64, conversationHistory=history, portfolioAnalysis="cached analysis"),
	)

	assert res.status_code == 200, res.text
	assert res.json()["portfolioAnalysis"] == "cached analysis"
	assert len(fake_llm.calls) == 1
	messages = fake_llm.calls[0]["messages"]
	assert messages[0]["content"].endswith("cached analysis")
	assert messages[1:] == [
		{"role": "assistant", "content": "Hi, tell me about the hero section."},
		{"role": "user", "content": "I used a gradient."},
	]


def test_supplied_analysis_skips_analysis_even_with_empty_history(fake_llm, image_b64):
	fake_llm.queue("Question")
	res = client.post("/api/analyze", json=_body(image_b64, portfolioAnalysis="cached"))
	assert res.status_code == 200
	assert len(fake_llm.calls) == 1


def test_history_is_capped(fake_llm, image_b64, monkeypatch):
	monkeypatch.setattr(settings, "max_history_messages", 2)
	fake_llm.queue("next")
	history = [{"role": "user" if i % 2 else "assistant", "content": f"m{i}"} for i in range(6)]

	client.post("/api/analyze", json=_body(image_b64, conversationHistory=history, portfolioAnalysis="a"))

	assert [m["content"] for m in fake_llm.calls[0]["messages"][1:]] == ["m4", "m5"]


def test_multiple_files_are_all_analysed(fake_llm):
	shots = [
		{"name": f"s{i}.png", "type": "image", "mimeType": "image/png", "base64": _png_b64()}
		for i in range(7)
	]
	fake_llm.queue("part one", "part two", "opening question")

	res = client.post("/api/analyze", json=_body(shots[0]["base64"], file=shots[0], files=shots))

	assert res.status_code == 200, res.text
	assert len(fake_llm.calls) == 3
	assert res.json()["portfolioAnalysis"].startswith("### Part 1\n")


def _png_b64():
	import base64

	return base64.b64encode(make_image_bytes(300, 200)).decode("ascii")


def test_content_filter_is_reported(fake_llm, image_b64):
	fake_llm.queue("analysis")
	fake_llm.queue("", finish_reason="content_filter")
	res = client.post("/api/analyze", json=_body(image_b64))
	assert res.status_code == 400
	assert "content policy" in res.json()["detail"]


@pytest.mark.parametrize("reply", ["I'm sorry, but I cannot help.", "Sorry. I CAN'T ASSIST with that."])
def test_refusals_are_reported(fake_llm, reply):
	fake_llm.queue(reply)
	res = client.post("/api/analyze", json=_body(_png_b64(), portfolioAnalysis="a", conversationHistory=[{"role": "user", "content": "hi"}]))
	assert res.status_code == 400
	assert "refused" in res.json()["detail"]


def test_empty_reply_falls_back(fake_llm):
	fake_llm.queue("")
	res = client.post("/api/analyze", json=_body(_png_b64(), portfolioAnalysis="a", conversationHistory=[{"role": "user", "content": "hi"}]))
	assert res.json()["message"] == FALLBACK_REPLY


def test_missing_fields_are_rejected():
	res = client.post("/api/analyze", json={"company": _company(), "position": "designer"})
	assert res.status_code == 422


def test_unknown_position_is_rejected(image_b64):
	res = client.post("/api/analyze", json=_body(image_b64, position="astronaut"))
	assert res.status_code == 422


def test_bad_document_is_a_client_error(fake_llm):
	body = _body("not-base64!!")
	res = client.post("/api/analyze", json=body)
	assert res.status_code == 400
	assert fake_llm.calls == []


def test_unconfigured_provider_is_503(monkeypatch, image_b64):
	monkeypatch.setattr(settings, "llm_provider", "groq")
	monkeypatch.setattr(settings, "groq_api_key", None)
	res = client.post("/api/analyze", json=_body(image_b64, portfolioAnalysis="a"))
	assert res.status_code == 503


def test_api_key_guard(monkeypatch, fake_llm, image_b64):
	monkeypatch.setattr(settings, "api_key", "secret")
	assert client.post("/api/analyze", json=_body(image_b64)).status_code == 401
	assert client.post("/api/analyze", json=_body(image_b64), headers={"Authorization": "Bearer nope"}).status_code == 401

	fake_llm.queue("q")
	res = client.post("/api/analyze", json=_body(image_b64, portfolioAnalysis="a"), headers={"X-API-Key": "secret"})
	assert res.status_code == 200


def test_upload_endpoint_compresses_images():
	res = client.post("/api/upload", files={"file": ("big.png", make_image_bytes(), "image/png")})
	assert res.status_code == 200, res.text
	body = res.json()
	assert body["file"]["mimeType"] == "image/jpeg"
	assert body["file"]["type"] == "image"
	assert body["sizeBytes"] > 0


def test_upload_endpoint_rejects_unknown_types():
	res = client.post("/api/upload", files={"file": ("notes.docx", b"PK..", "application/msword")})
	assert res.status_code == 415


def test_upload_endpoint_rejects_oversized_images(monkeypatch):
	monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10_000)
	bomb = make_image_bytes(300, 300, color=1, mode="1")
	res = client.post("/api/upload", files={"file": ("huge.png", bomb, "image/png")})
	assert res.status_code == 400
	assert "huge.png" in res.json()["detail"]


def test_upload_endpoint_rejects_heic():
	res = client.post("/api/upload", files={"file": ("IMG_0001.heic", b"\x00\x00\x00\x18ftypheic", "image/heic")})
	assert res.status_code == 415
