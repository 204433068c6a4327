from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Literal, Optional
from datetime import datetime


Position = Literal["designer", "frontend", "backend", "fullstack", "pm", "marketer", "other"]
Experience = Literal["junior", "mid", "senior"]
Role = Literal["user", "assistant"]
FileType = Literal["image", "pdf"]


class ApiModel(BaseModel):
	"""Base for wire models. Accepts both snake_case and the mobile client's camelCase keys."""

	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadedFile(ApiModel):
	name: str
	type: FileType
	mime_type: str = Field(..., description="e.g. image/jpeg, application/pdf")
	base64: Optional[str] = Field(default=None, description="Raw base64 payload, no data: prefix")
	extracted_text: Optional[str] = Field(default=None, description="Text already extracted from the document")


class Company(ApiModel):
	id: str
	name: str = Field(..., min_length=1)
	industry: str
	interview_focus: List[str] = Field(default_factory=list)
	portfolio_tips: List[str] = Field(default_factory=list)
	common_questions: List[str] = Field(default_factory=list)
	job_posting: Optional[str] = None


class Message(ApiModel):
	id: Optional[str] = None
	role: Role
	content: str
	timestamp: Optional[datetime] = None
	is_difficult: Optional[bool] = None


class AnalyzeIn(ApiModel):
	file: UploadedFile
	files: Optional[List[UploadedFile]] = Field(default=None, description="All uploaded files when more than one was picked")
	company: Company
	position: Position
	experience: Experience
	conversation_history: List[Message] = Field(default_factory=list)
	portfolio_analysis: Optional[str] = Field(default=None, description="Analysis returned by the first turn, replayed by the client")


class AnalyzeOut(ApiModel):
	message: str
	portfolio_analysis: str


class SearchCompanyIn(ApiModel):
	company_name: str
	position: Optional[str] = None
	job_posting: Optional[str] = None


class SearchCompanyOut(ApiModel):
	company: Company


class CompanyList(ApiModel):
	items: List[Company]


class UploadOut(ApiModel):
	file: UploadedFile
	size_bytes: int
	characters: int = 0


class InterviewRecordIn(ApiModel):
	company: Company
	position: Position
	experience: Experience
	messages: List[Message]
	difficult_questions: List[str] = Field(default_factory=list, description="Ids of assistant messages marked difficult")


class InterviewRecord(InterviewRecordIn):
	id: str
	created_at: datetime


class InterviewRecordSummary(ApiModel):
	id: str
	company_name: str
	position: Position
	experience: Experience
	message_count: int
	difficult_count: int
	created_at: datetime


class InterviewRecordList(ApiModel):
	items: List[InterviewRecordSummary]


class ScoreItem(ApiModel):
	id: str
	description: str
	points: int
	examples: List[str] = Field(default_factory=list)


class ScoreCategory(ApiModel):
	name: str
	max_score: int
	items: List[ScoreItem]


class ScoreCriteria(ApiModel):
	categories: List[ScoreCategory]
	max_total: int


class ScoreIn(ApiModel):
	checked_items: List[str] = Field(default_factory=list)


class ScoreOut(ApiModel):
	total: int
	max_total: int
	categories: Dict[str, int]
	feedback: str
