from __future__ import annotations


class DocumentError(ValueError):
	"""An uploaded file could not be turned into analysable content."""


class UnsupportedDocumentError(DocumentError):
	pass


class LLMNotConfiguredError(RuntimeError):
	"""The selected provider has no API key or SDK available."""


class LLMResponseError(RuntimeError):
	"""The model answered, but not in the shape we asked for."""


class ContentRefusedError(RuntimeError):
	"""The model refused the request or its content filter fired."""

	def __init__(self, message: str, *, reason: str) -> None:
		super().__init__(message)
		self.reason = reason


class CompanyNotFoundError(LookupError):
	def __init__(self, company_name: str) -> None:
		super().__init__(f'Could not find a company named "{company_name}".')
		self.company_name = company_name
