import json

import pytest
from fastapi.testclient import TestClient

from portfolio_interview.main import app
from portfolio_interview.services.company_service import parse_company_info, parse_verification
from portfolio_interview.services.errors import LLMResponseError
from portfolio_interview.services.llm_service import parse_json_reply, strip_code_fences


client = TestClient(app)

INFO = {
	"industry": "IT/Healthcare",
	"interview_focus": ["Problem solving", "Collaboration", "Technical depth"],
	"portfolio_tips": ["Quantify impact", "Explain trade-offs", "Show process"],
	"common_questions": ["Why us?", "Hardest bug?", "Biggest failure?"],
}


def test_strip_code_fences():
	assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
	assert strip_code_fences('```\n{"a": 1}```') == '{"a": 1}'


def test_parse_json_reply_finds_object_inside_prose():
	assert parse_json_reply('Sure! {"status": "exists"} Hope that helps.') == {"status": "exists"}


@pytest.mark.parametrize("text", ["not json", "[1, 2]", "{broken"])
def test_parse_json_reply_rejects_non_objects(text):
	with pytest.raises(LLMResponseError):
		parse_json_reply(text)


def test_parse_verification_accepts_legacy_key():
	v = parse_verification('{"status": "exists", "confidence": "high", "realName": "Gangnam Unni"}')
	assert v.exists and v.real_name == "Gangnam Unni" and v.confidence == "high"


def test_parse_company_info_requires_all_keys():
	partial = {k: v for k, v in INFO.items() if k != "portfolio_tips"}
	with pytest.raises(LLMResponseError, match="portfolio_tips"):
		parse_company_info(json.dumps(partial))


def test_parse_company_info_accepts_camel_case():
	camel = {
		"industry": "Retail",
		"interviewFocus": ["Ownership"],
		"portfolioTips": ["Numbers"],
		"commonQuestions": ["Why?"],
	}
	assert parse_company_info(json.dumps(camel))["interview_focus"] == ["Ownership"]


def test_search_company_verifies_then_generates(fake_llm):
	fake_llm.queue(
		'```json\n{"status": "exists", "confidence": "high", "real_name": "Gangnam Unni"}\n```',
		"```json\n" + json.dumps(INFO) + "\n```",
	)

	res = client.post(
		"/api/search-company",
		json={"companyName": "  gangnam unni ", "position": "designer", "jobPosting": "Design our booking flow"},
	)

	assert res.status_code == 200, res.text
	company = res.json()["company"]
	assert company["id"] == "custom"
	assert company["name"] == "Gangnam Unni"
	assert company["interviewFocus"] == INFO["interview_focus"]
	assert company["jobPosting"] == "Design our booking flow"

	verify_call, info_call = fake_llm.calls
	assert 'called "gangnam unni"' in verify_call["messages"][1]["content"]
	assert verify_call["temperature"] == 0.3 and verify_call["max_tokens"] == 200
	assert '"Gangnam Unni"' in info_call["messages"][1]["content"]
	assert "Design our booking flow" in info_call["messages"][1]["content"]
	assert info_call["temperature"] == 0.7 and info_call["max_tokens"] == 1000


def test_search_company_falls_back_to_input_name(fake_llm):
	fake_llm.queue('{"status": "exists", "confidence": "medium", "real_name": ""}', json.dumps(INFO))
	res = client.post("/api/search-company", json={"companyName": "Initech"})
	assert res.json()["company"]["name"] == "Initech"


def test_unknown_company_is_404(fake_llm):
	fake_llm.queue('{"status": "not_found", "confidence": "high", "real_name": ""}')
	res = client.post("/api/search-company", json={"companyName": "NoSuchCo123"})
	assert res.status_code == 404
	assert res.json()["notFound"] is True
	assert len(fake_llm.calls) == 1


def test_blank_company_name_is_400(fake_llm):
	res = client.post("/api/search-company", json={"companyName": "   "})
	assert res.status_code == 400
	assert fake_llm.calls == []


def test_unparseable_verification_is_502(fake_llm):
	fake_llm.queue("I think it exists.")
	res = client.post("/api/search-company", json={"companyName": "Acme"})
	assert res.status_code == 502


def test_incomplete_info_is_502(fake_llm):
	fake_llm.queue('{"status": "exists", "real_name": "Acme"}', '{"industry": "Retail"}')
	res = client.post("/api/search-company", json={"companyName": "Acme"})
	assert res.status_code == 502


def test_list_and_filter_presets():
	names = [c["name"] for c in client.get("/api/companies").json()["items"]]
	assert "Kakao" in names and len(names) == 6

	filtered = client.get("/api/companies", params={"q": "TOSS"}).json()["items"]
	assert [c["id"] for c in filtered] == ["toss"]


def test_get_preset_by_id():
	assert client.get("/api/companies/naver").json()["industry"] == "IT/Internet"
	assert client.get("/api/companies/nope").status_code == 404
