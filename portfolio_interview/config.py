from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List
from dotenv import load_dotenv


# Ensure .env is loaded eagerly
load_dotenv(dotenv_path=".env")


class Settings(BaseSettings):
	# Server
	host: str = "0.0.0.0"
	port: int = 8000
	cors_allow_origins: List[str] = ["*"]

	# Auth
	api_key: str | None = None  # simple bearer key if provided

	# LLM Provider Selection
	llm_provider: str = "groq"  # options: groq, gemini

	# Groq
	groq_api_key: str | None = None
	groq_chat_model: str = "llama-3.3-70b-versatile"
	groq_vision_model: str = "meta-llama/llama-4-scout-17b-16e-instruct"

	# Google Gemini
	gemini_api_key: str | None = None
	gemini_model: str = "models/gemini-2.5-flash"

	# Interview turns
	interview_language: str = "Korean"
	interview_temperature: float = 0.7
	interview_max_tokens: int = 1000
	max_history_messages: int = 40

	# Portfolio analysis
	analysis_temperature: float = 0.3
	analysis_max_tokens: int = 1500
	image_batch_size: int = 5

	# Company search
	verify_temperature: float = 0.3
	verify_max_tokens: int = 200
	company_temperature: float = 0.7
	company_max_tokens: int = 1000

	# Document ingestion
	image_max_side: int = 800
	image_jpeg_quality: int = 60
	max_image_mb: float = 4.0
	max_total_image_mb: float = 4.0
	pdf_min_text_chars: int = 50
	pdf_max_pages: int = 20
	pdf_render_dpi: int = 110

	# Storage
	records_dir: str = "data/records"
	max_records: int = 20

	# Logging
	log_level: str = "INFO"
	analytics_path: str | None = None  # e.g., logs/interviews.jsonl

	@field_validator("interview_temperature", "analysis_temperature", "verify_temperature", "company_temperature")
	@classmethod
	def clamp_temperature(cls, v: float) -> float:
		return max(0.0, min(2.0, v))

	@field_validator("image_batch_size")
	@classmethod
	def positive_batch(cls, v: int) -> int:
		return max(1, v)

	@field_validator("cors_allow_origins", mode="before")
	@classmethod
	def parse_cors_origins(cls, v):
		# Allow environment variable override
		if isinstance(v, str):
			return [origin.strip() for origin in v.split(",")]
		return v

	class Config:
		env_file = ".env"
		env_file_encoding = "utf-8"


settings = Settings()
