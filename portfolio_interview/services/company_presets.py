from __future__ import annotations

from typing import List, Optional

from portfolio_interview.schemas import Company


COMPANIES: List[Company] = [
	Company(
		id="kakao",
		name="Kakao",
		industry="IT/Internet",
		interview_focus=[
			"User-centred thinking",
			"Collaboration",
			"Technical depth",
			"Problem solving",
			"Service improvement experience",
		],
		portfolio_tips=[
			"Highlight design work that considered a very large user base",
			"Include cases of data-driven decision making",
			"Describe the team process and your own role clearly",
			"Give concrete success metrics (MAU, conversion rate, ...)",
			"Explain why you chose your tech stack and the trade-offs",
		],
		common_questions=[
			"What was the hardest technical challenge in this project?",
			"How did you incorporate user feedback?",
			"How do you resolve disagreements with teammates?",
			"What were the key success metrics of this project?",
		],
	),
	Company(
		id="naver",
		name="Naver",
		industry="IT/Internet",
		interview_focus=[
			"Engineering skill",
			"Scalable design",
			"Code quality",
			"Performance optimisation",
			"Problem definition",
		],
		portfolio_tips=[
			"Write up technical depth and implementation details",
			"Include before/after data for performance work",
			"Explain the architecture with scalability in mind",
			"Show effort on code quality (tests, refactoring)",
			"Add tech blog posts or open source contributions",
		],
		common_questions=[
			"Where was the bottleneck in this system and how did you fix it?",
			"Why did you choose this tech stack?",
			"How did you run code reviews?",
			"What breaks if traffic grows tenfold?",
		],
	),
	Company(
		id="toss",
		name="Toss",
		industry="Fintech",
		interview_focus=[
			"User experience",
			"Obsession with detail",
			"Fast execution",
			"Data-driven thinking",
			"Creating customer value",
		],
		portfolio_tips=[
			"Explain the UI/UX improvement process and the reasons behind it",
			"Emphasise experience with experimentation such as A/B tests",
			"Show fast iterations and improvements",
			"Describe analysis of user behaviour data",
			"Show concise, intuitive interface designs",
		],
		common_questions=[
			"Why should a user use this feature?",
			"How did you measure the effect of the UI change?",
			"What did you improve the most, and why?",
			"Were there unexpected usage patterns after launch?",
		],
	),
	Company(
		id="coupang",
		name="Coupang",
		industry="E-commerce/Tech",
		interview_focus=[
			"Large-scale systems",
			"Problem solving",
			"Ownership",
			"Data-driven decisions",
			"Customer obsession",
		],
		portfolio_tips=[
			"Show experience handling high traffic",
			"Include system stability improvements",
			"Describe monitoring and incident response",
			"Quantify business impact",
			"Show end-to-end project ownership",
		],
		common_questions=[
			"How did you respond during an outage?",
			"How did you build system monitoring?",
			"What was the business impact of the project?",
			"Have you improved a legacy system?",
		],
	),
	Company(
		id="startup",
		name="Startup (general)",
		industry="Startup",
		interview_focus=[
			"Learning speed",
			"Wearing many hats",
			"Proactive problem solving",
			"Product mindset",
			"Communication",
		],
		portfolio_tips=[
			"Emphasise 0-to-1 projects",
			"Show problem solving with limited resources",
			"Show range across tech stacks",
			"Include fast MVP building and pivots",
			"Describe collaboration outside engineering (planning, design)",
		],
		common_questions=[
			"Have you completed a project on your own?",
			"Tell me about a time you learned a new technology quickly.",
			"How did you prioritise under a tight deadline?",
			"What did you learn from a failed project?",
		],
	),
	Company(
		id="samsung",
		name="Samsung Electronics",
		industry="Electronics/Manufacturing",
		interview_focus=[
			"Technical expertise",
			"R&D capability",
			"Collaboration and communication",
			"Global mindset",
			"Innovation",
		],
		portfolio_tips=[
			"Show hardware/software integration work",
			"List research output such as patents or papers",
			"Include global project experience",
			"Show adoption of recent technology trends",
			"Demonstrate systematic documentation",
		],
		common_questions=[
			"Which recent technology trend interests you?",
			"What makes your research project original?",
			"Have you worked with a global team?",
			"How did you solve a hard technical problem?",
		],
	),
]


def get_company_by_id(company_id: str) -> Optional[Company]:
	for company in COMPANIES:
		if company.id == company_id:
			return company
	return None


def find_companies(query: str) -> List[Company]:
	"""Case-insensitive substring match on the company name."""
	needle = query.strip().lower()
	if not needle:
		return list(COMPANIES)
	return [c for c in COMPANIES if needle in c.name.lower()]
