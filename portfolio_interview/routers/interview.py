from fastapi import APIRouter, HTTPException, UploadFile, File
import anyio

from portfolio_interview.schemas import AnalyzeIn, AnalyzeOut, UploadOut
from portfolio_interview.services.document_service import ingest_upload
from portfolio_interview.services.errors import (
	ContentRefusedError,
	DocumentError,
	LLMNotConfiguredError,
	UnsupportedDocumentError,
)
from portfolio_interview.services.interview_service import run_turn
from portfolio_interview.utils.audit import auditor


router = APIRouter()


@router.post("/analyze", response_model=AnalyzeOut)
async def analyze(payload: AnalyzeIn):
	try:
		result = await run_turn(payload)
	except DocumentError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except ContentRefusedError as e:
		await auditor.log({
			"type": "refusal",
			"company": payload.company.name,
			"reason": e.reason,
		})
		raise HTTPException(status_code=400, detail=str(e))
	except LLMNotConfiguredError as e:
		raise HTTPException(status_code=503, detail=str(e))

	await auditor.log({
		"type": "analysis" if result.first_turn else "interview_turn",
		"company": payload.company.name,
		"position": payload.position,
		"experience": payload.experience,
		"history_length": len(payload.conversation_history),
		"reply_chars": len(result.message),
	})
	return AnalyzeOut(message=result.message, portfolio_analysis=result.portfolio_analysis)


@router.post("/upload", response_model=UploadOut)
async def upload_document(file: UploadFile = File(...)):
	"""Server-side ingestion for clients that cannot resize images or read PDFs themselves."""
	data = await file.read()
	try:
		uploaded = await anyio.to_thread.run_sync(ingest_upload, file.filename or "", file.content_type or "", data)
	except UnsupportedDocumentError as e:
		raise HTTPException(status_code=415, detail=str(e))
	except DocumentError as e:
		raise HTTPException(status_code=400, detail=str(e))

	await auditor.log({
		"type": "document_upload",
		"filename": file.filename,
		"bytes": len(data),
		"file_type": uploaded.type,
	})
	return UploadOut(
		file=uploaded,
		size_bytes=len(data),
		characters=len(uploaded.extracted_text or ""),
	)
