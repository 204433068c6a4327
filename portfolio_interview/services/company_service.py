from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from portfolio_interview.config import settings
from portfolio_interview.schemas import Company
from portfolio_interview.services import prompts
from portfolio_interview.services.errors import CompanyNotFoundError, LLMResponseError
from portfolio_interview.services.llm_service import llm_service, parse_json_reply


logger = logging.getLogger(__name__)

REQUIRED_INFO_KEYS = ("industry", "interview_focus", "portfolio_tips", "common_questions")


@dataclass
class Verification:
	exists: bool
	confidence: str
	real_name: str


def _as_str_list(value: Any) -> List[str]:
	if isinstance(value, str):
		return [value.strip()] if value.strip() else []
	if isinstance(value, list):
		return [str(v).strip() for v in value if str(v).strip()]
	return []


def parse_verification(text: str) -> Verification:
	data = parse_json_reply(text)
	# Accept the camelCase key older prompts asked for
	real_name = data.get("real_name") or data.get("realName") or ""
	return Verification(
		exists=data.get("status") == "exists",
		confidence=str(data.get("confidence") or "low"),
		real_name=str(real_name).strip(),
	)


def parse_company_info(text: str) -> Dict[str, Any]:
	data = parse_json_reply(text)
	aliases = {"interviewFocus": "interview_focus", "portfolioTips": "portfolio_tips", "commonQuestions": "common_questions"}
	for camel, snake in aliases.items():
		if snake not in data and camel in data:
			data[snake] = data.pop(camel)
	missing = [key for key in REQUIRED_INFO_KEYS if not data.get(key)]
	if missing:
		raise LLMResponseError(f"Incomplete company information generated (missing: {', '.join(missing)})")
	return {
		"industry": str(data["industry"]).strip(),
		"interview_focus": _as_str_list(data["interview_focus"]),
		"portfolio_tips": _as_str_list(data["portfolio_tips"]),
		"common_questions": _as_str_list(data["common_questions"]),
	}


async def verify_company(company_name: str) -> Verification:
	completion = await llm_service.chat(
		[
			{"role": "system", "content": prompts.VERIFY_SYSTEM_PROMPT},
			{"role": "user", "content": prompts.build_verify_prompt(company_name)},
		],
		temperature=settings.verify_temperature,
		max_tokens=settings.verify_max_tokens,
	)
	return parse_verification(completion.text)


async def search_company(company_name: str, position: Optional[str] = None, job_posting: Optional[str] = None) -> Company:
	"""Verify that a company exists, then generate its interview profile.

	Raises CompanyNotFoundError when the verifier does not recognise the name.
	"""
	name = company_name.strip()
	posting = (job_posting or "").strip()

	verification = await verify_company(name)
	logger.info("Company verification %r -> exists=%s confidence=%s", name, verification.exists, verification.confidence)
	if not verification.exists:
		raise CompanyNotFoundError(name)

	actual_name = verification.real_name or name
	completion = await llm_service.chat(
		[
			{"role": "system", "content": prompts.COMPANY_INFO_SYSTEM_PROMPT},
			{
				"role": "user",
				"content": prompts.build_company_info_prompt(
					actual_name, position or "", posting, language=settings.interview_language
				),
			},
		],
		temperature=settings.company_temperature,
		max_tokens=settings.company_max_tokens,
	)
	info = parse_company_info(completion.text)
	return Company(id="custom", name=actual_name, job_posting=posting or None, **info)
