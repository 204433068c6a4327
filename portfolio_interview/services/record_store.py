from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional
import asyncio
import json
import logging
import time
from pathlib import Path

from pydantic import ValidationError

from portfolio_interview.config import settings
from portfolio_interview.schemas import InterviewRecord, InterviewRecordIn, InterviewRecordSummary, Message


logger = logging.getLogger(__name__)


class RecordStore:
	"""Saved interviews, one JSON file per record, newest first, capped at max_records."""

	def __init__(self, data_dir: str | Path | None = None, max_records: int | None = None) -> None:
		self._records: Dict[str, InterviewRecord] = {}
		self._lock = asyncio.Lock()
		self._data_dir = Path(data_dir or settings.records_dir)
		self._max_records = max_records or settings.max_records
		self._data_dir.mkdir(parents=True, exist_ok=True)
		self._load_all()

	def _record_path(self, record_id: str) -> Path:
		return self._data_dir / f"{record_id}.json"

	def _load_all(self) -> None:
		for p in self._data_dir.glob("*.json"):
			try:
				with p.open("r", encoding="utf-8") as f:
					record = InterviewRecord.model_validate(json.load(f))
			except (OSError, json.JSONDecodeError, ValidationError) as exc:
				logger.warning("Skipping unreadable record %s: %s", p.name, exc)
				continue
			self._records[record.id] = record

	def _save(self, record: InterviewRecord) -> None:
		path = self._record_path(record.id)
		try:
			with path.open("w", encoding="utf-8") as f:
				f.write(record.model_dump_json(indent=2))
		except OSError as exc:
			# Keep serving from memory; the record is lost on restart
			logger.error("Could not persist record %s: %s", record.id, exc)

	def _unlink(self, record_id: str) -> None:
		path = self._record_path(record_id)
		try:
			if path.exists():
				path.unlink()
		except OSError as exc:
			logger.error("Could not delete record file %s: %s", path.name, exc)

	def _new_id(self) -> str:
		record_id = str(int(time.time() * 1000))
		# Two saves inside the same millisecond
		while record_id in self._records:
			record_id = str(int(record_id) + 1)
		return record_id

	def _ordered(self) -> List[InterviewRecord]:
		return sorted(self._records.values(), key=lambda r: (r.created_at, r.id), reverse=True)

	async def save(self, payload: InterviewRecordIn) -> InterviewRecord:
		async with self._lock:
			record = InterviewRecord(
				id=self._new_id(),
				created_at=datetime.utcnow(),
				**payload.model_dump(),
			)
			self._records[record.id] = record
			self._save(record)
			for stale in self._ordered()[self._max_records:]:
				self._records.pop(stale.id, None)
				self._unlink(stale.id)
				logger.info("Dropped oldest record %s (limit %d)", stale.id, self._max_records)
			return record

	async def get(self, record_id: str) -> Optional[InterviewRecord]:
		return self._records.get(record_id)

	async def get_required(self, record_id: str) -> InterviewRecord:
		record = await self.get(record_id)
		if record is None:
			raise KeyError("record not found")
		return record

	async def list_records(self) -> List[InterviewRecord]:
		return self._ordered()

	async def list_summaries(self) -> List[InterviewRecordSummary]:
		return [
			InterviewRecordSummary(
				id=r.id,
				company_name=r.company.name,
				position=r.position,
				experience=r.experience,
				message_count=len(r.messages),
				difficult_count=len(r.difficult_questions),
				created_at=r.created_at,
			)
			for r in self._ordered()
		]

	async def delete(self, record_id: str) -> bool:
		"""Delete a record and its file. Returns True if it existed."""
		async with self._lock:
			if self._records.pop(record_id, None) is None:
				return False
			self._unlink(record_id)
			return True

	async def difficult_questions(self, record_id: str) -> List[Message]:
		record = await self.get_required(record_id)
		marked = set(record.difficult_questions)
		return [m for m in record.messages if m.role == "assistant" and m.id in marked]


_store: RecordStore | None = None


def get_record_store() -> RecordStore:
	global _store
	if _store is None:
		_store = RecordStore()
	return _store
