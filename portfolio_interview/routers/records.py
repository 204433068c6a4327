from fastapi import APIRouter, HTTPException, Depends
from typing import List

from portfolio_interview.schemas import (
	InterviewRecord,
	InterviewRecordIn,
	InterviewRecordList,
	Message,
	ScoreCriteria,
	ScoreIn,
	ScoreOut,
)
from portfolio_interview.services import scoring
from portfolio_interview.services.record_store import RecordStore, get_record_store
from portfolio_interview.utils.audit import auditor


router = APIRouter()


@router.post("/records", response_model=InterviewRecord)
async def save_record(payload: InterviewRecordIn, store: RecordStore = Depends(get_record_store)):
	if not payload.messages:
		raise HTTPException(status_code=400, detail="Cannot save an interview without messages")
	record = await store.save(payload)
	await auditor.log({
		"type": "record_saved",
		"record_id": record.id,
		"company": record.company.name,
		"messages": len(record.messages),
		"difficult": len(record.difficult_questions),
	})
	return record


@router.get("/records", response_model=InterviewRecordList)
async def list_records(store: RecordStore = Depends(get_record_store)):
	return InterviewRecordList(items=await store.list_summaries())


@router.get("/records/{record_id}", response_model=InterviewRecord)
async def get_record(record_id: str, store: RecordStore = Depends(get_record_store)):
	try:
		return await store.get_required(record_id)
	except KeyError:
		raise HTTPException(status_code=404, detail="Record not found")


@router.delete("/records/{record_id}")
async def delete_record(record_id: str, store: RecordStore = Depends(get_record_store)):
	deleted = await store.delete(record_id)
	if not deleted:
		raise HTTPException(status_code=404, detail="Record not found")
	return {"status": "ok", "deleted": True}


@router.get("/records/{record_id}/difficult", response_model=List[Message])
async def difficult_questions(record_id: str, store: RecordStore = Depends(get_record_store)):
	try:
		return await store.difficult_questions(record_id)
	except KeyError:
		raise HTTPException(status_code=404, detail="Record not found")


@router.get("/score/criteria", response_model=ScoreCriteria)
async def score_criteria():
	return scoring.criteria()


@router.post("/score", response_model=ScoreOut)
async def score_interview(payload: ScoreIn):
	try:
		return scoring.score(payload.checked_items)
	except ValueError as e:
		raise HTTPException(status_code=400, detail=str(e))
