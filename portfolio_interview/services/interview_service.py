from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

from portfolio_interview.config import settings
from portfolio_interview.schemas import AnalyzeIn, Company, Message, UploadedFile
from portfolio_interview.services import prompts
from portfolio_interview.services.analysis_service import analyze_portfolio
from portfolio_interview.services.errors import ContentRefusedError
from portfolio_interview.services.llm_service import ChatMessage, Completion, llm_service


logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Unable to generate a response."
REFUSAL_MARKERS = ("i'm sorry", "i can't assist")


@dataclass
class TurnResult:
	message: str
	portfolio_analysis: str
	first_turn: bool


def is_first_request(history: Sequence[Message], portfolio_analysis: Optional[str]) -> bool:
	return len(history) == 0 and not portfolio_analysis


def request_files(payload: AnalyzeIn) -> List[UploadedFile]:
	# files is only sent when more than one file was picked; it already contains file
	if payload.files:
		return list(payload.files)
	return [payload.file]


def build_turn_messages(
	system_prompt: str,
	company: Company,
	history: Sequence[Message],
	first_turn: bool,
) -> List[ChatMessage]:
	messages: List[ChatMessage] = [{"role": "system", "content": system_prompt}]
	if first_turn:
		messages.append({"role": "user", "content": prompts.build_kickoff_message(company)})
		return messages
	recent = list(history)[-settings.max_history_messages:] if settings.max_history_messages > 0 else list(history)
	for msg in recent:
		messages.append({"role": msg.role, "content": msg.content})
	return messages


def check_refusal(completion: Completion) -> None:
	if completion.filtered:
		raise ContentRefusedError(
			"The uploaded images violate the content policy. Please use different images.",
			reason="content_filter",
		)
	lowered = completion.text.lower()
	if any(marker in lowered for marker in REFUSAL_MARKERS):
		raise ContentRefusedError(
			"Image analysis was refused. Please use images that only contain portfolio content.",
			reason="refusal",
		)


async def run_turn(payload: AnalyzeIn) -> TurnResult:
	"""One interview turn: analyse on the first request, then ask the interviewer persona."""
	first_turn = is_first_request(payload.conversation_history, payload.portfolio_analysis)

	analysis = payload.portfolio_analysis or ""
	if first_turn:
		analysis = await analyze_portfolio(request_files(payload))
		logger.info("Portfolio analysed for %s (%d chars)", payload.company.name, len(analysis))

	system_prompt = prompts.with_analysis(
		prompts.build_interviewer_prompt(
			payload.company,
			payload.position,
			payload.experience,
			language=settings.interview_language,
		),
		analysis,
	)
	messages = build_turn_messages(system_prompt, payload.company, payload.conversation_history, first_turn)

	completion = await llm_service.chat(
		messages,
		temperature=settings.interview_temperature,
		max_tokens=settings.interview_max_tokens,
	)
	check_refusal(completion)
	reply = completion.text or FALLBACK_REPLY
	return TurnResult(message=reply, portfolio_analysis=analysis, first_turn=first_turn)
