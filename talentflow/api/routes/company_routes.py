"""
Company Routes

POST /companies - Create company profile
GET /companies/{company_id} - Get profile
PUT /companies/{company_id} - Update profile
POST /companies/{company_id}/internships - Post an internship
GET /companies/{company_id}/internships - Get company's internships
GET /companies/{company_id}/analytics - Applicant analytics across postings
"""

from fastapi import APIRouter, Depends
from typing import List

from talentflow.services.company_service import CompanyService, get_company_service
from talentflow.api.routes.internship_routes import to_internship_response
from talentflow.schemas.schemas import (
    CompanyCreate, CompanyUpdate, CompanyResponse, InternshipCreate,
    InternshipResponse, InternshipAnalyticsResponse
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_profile(data: CompanyCreate, service: CompanyService = Depends(get_company_service)):
    """Create a company profile."""
    return service.create_company(data).model_dump()


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_profile(company_id: str, service: CompanyService = Depends(get_company_service)):
    """Get a company's profile."""
    return service.get_company(company_id).model_dump()


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_profile(
    company_id: str,
    data: CompanyUpdate,
    service: CompanyService = Depends(get_company_service)
):
    """Update company profile. Only provided fields are updated."""
    return service.update_company(company_id, data).model_dump()


@router.post("/{company_id}/internships", response_model=InternshipResponse, status_code=201)
async def post_internship(
    company_id: str,
    data: InternshipCreate,
    service: CompanyService = Depends(get_company_service)
):
    """Post a new internship."""
    return to_internship_response(service.post_internship(company_id, data))


@router.get("/{company_id}/internships", response_model=List[InternshipResponse])
async def get_company_internships(company_id: str, service: CompanyService = Depends(get_company_service)):
    """Get all internships posted by this company."""
    return [to_internship_response(i) for i in service.list_internships(company_id)]


@router.get("/{company_id}/analytics", response_model=InternshipAnalyticsResponse)
async def get_analytics(company_id: str, service: CompanyService = Depends(get_company_service)):
    """
    Applicant analytics across all of the company's internships.

    Total applicants, average match %, highest final score,
    most common applicant skill and applications per day.
    """
    return service.get_internship_analytics(company_id)
