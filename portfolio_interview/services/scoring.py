"""Self-assessment checklist scored out of 100 after a mock interview."""
from __future__ import annotations

from typing import Dict, Iterable, List

from portfolio_interview.schemas import ScoreCategory, ScoreCriteria, ScoreItem, ScoreOut


CRITERIA: List[ScoreCategory] = [
	ScoreCategory(
		name="Preparation",
		max_score=20,
		items=[
			ScoreItem(
				id="company_research",
				description="Researched the company (history, business, financials, news, job description)",
				points=10,
				examples=["Mentions recent company news or business direction", "Ties preparation to job description keywords"],
			),
			ScoreItem(
				id="resume_mastery",
				description="Can explain every resume item within a minute",
				points=10,
				examples=["States the core of each role clearly", "Stresses experience that overlaps the job description"],
			),
		],
	),
	ScoreCategory(
		name="Interview answers",
		max_score=60,
		items=[
			ScoreItem(
				id="self_intro",
				description="Self-introduction: keyword driven, experience to result to strength, under a minute",
				points=10,
				examples=["Fact based and concise", "No flowery wording, only the essentials"],
			),
			ScoreItem(
				id="core_questions",
				description="Job-description questions: personal role, experience and capability explained clearly",
				points=20,
				examples=["Explains personal contribution, not team output", "Offers solutions matched to company needs"],
			),
			ScoreItem(
				id="common_questions",
				description="Common questions (motivation, strengths/weaknesses, success/failure stories)",
				points=20,
				examples=[
					"Motivation: future focused, avoids negatives",
					"Strength: attitude to action to result",
					"Weakness: presented with evidence of improvement",
					"Success/failure: concrete case and lesson learned",
				],
			),
			ScoreItem(
				id="final_question",
				description="Closing question: company vision, growth path, insightful question",
				points=10,
				examples=["Asks about the company's future direction", "Signals long-term commitment", "Avoids leave and work-life questions"],
			),
		],
	),
	ScoreCategory(
		name="Attitude",
		max_score=20,
		items=[
			ScoreItem(
				id="answer_style",
				description="Answer style: conclusion first, concise, concrete numbers, positive close",
				points=15,
				examples=[
					"Speaks a little slower than usual",
					"Replaces vague words with numbers",
					"Does not end on a negative",
					"Takes 1-2 seconds to organise before answering",
				],
			),
			ScoreItem(
				id="behavior",
				description="Demeanour: posture, eye contact, bright expression, long-term motivation",
				points=5,
				examples=["Sits forward and keeps eye contact", "Bright expression and light nods", "Avoids a noncommittal attitude"],
			),
		],
	),
]

FEEDBACK_BANDS = [
	(90, "Excellent interview. Your chances of passing are very high."),
	(80, "Strong interview. You likely left a good impression."),
	(70, "Good interview. A few improvements would make it even better."),
	(60, "Average. Work on the weaker areas."),
	(0, "More preparation needed. Use the checklist to prepare again."),
]


def criteria() -> ScoreCriteria:
	return ScoreCriteria(categories=CRITERIA, max_total=sum(c.max_score for c in CRITERIA))


def item_ids() -> set[str]:
	return {item.id for category in CRITERIA for item in category.items}


def feedback_for(score: int) -> str:
	for threshold, text in FEEDBACK_BANDS:
		if score >= threshold:
			return text
	return FEEDBACK_BANDS[-1][1]


def score(checked: Iterable[str]) -> ScoreOut:
	checked = set(checked)
	unknown = checked - item_ids()
	if unknown:
		raise ValueError(f"Unknown checklist items: {', '.join(sorted(unknown))}")
	per_category: Dict[str, int] = {
		category.name: sum(item.points for item in category.items if item.id in checked)
		for category in CRITERIA
	}
	total = sum(per_category.values())
	return ScoreOut(
		total=total,
		max_total=sum(c.max_score for c in CRITERIA),
		categories=per_category,
		feedback=feedback_for(total),
	)
