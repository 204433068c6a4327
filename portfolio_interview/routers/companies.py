from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from typing import Optional

from portfolio_interview.schemas import Company, CompanyList, SearchCompanyIn, SearchCompanyOut
from portfolio_interview.services.company_presets import find_companies, get_company_by_id
from portfolio_interview.services.company_service import search_company
from portfolio_interview.services.errors import CompanyNotFoundError, LLMNotConfiguredError, LLMResponseError
from portfolio_interview.utils.audit import auditor


router = APIRouter()


@router.get("/companies", response_model=CompanyList)
async def list_companies(q: Optional[str] = None):
	return CompanyList(items=find_companies(q or ""))


@router.get("/companies/{company_id}", response_model=Company)
async def get_company(company_id: str):
	company = get_company_by_id(company_id)
	if company is None:
		raise HTTPException(status_code=404, detail="Company not found")
	return company


@router.post("/search-company", response_model=SearchCompanyOut)
async def search_company_info(payload: SearchCompanyIn):
	if not payload.company_name or not payload.company_name.strip():
		raise HTTPException(status_code=400, detail="Company name is required.")

	try:
		company = await search_company(payload.company_name, payload.position, payload.job_posting)
	except CompanyNotFoundError as e:
		# Clients key off notFound to offer a manual entry form
		return JSONResponse(status_code=404, content={"detail": str(e), "notFound": True})
	except LLMResponseError as e:
		raise HTTPException(status_code=502, detail=f"Could not generate company information: {e}")
	except LLMNotConfiguredError as e:
		raise HTTPException(status_code=503, detail=str(e))

	await auditor.log({
		"type": "company_search",
		"query": payload.company_name,
		"company": company.name,
		"has_job_posting": bool(company.job_posting),
	})
	return SearchCompanyOut(company=company)
