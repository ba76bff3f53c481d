"""
Internship Routes

GET /internships/{internship_id} - Get internship details
PUT /internships/{internship_id} - Update internship
DELETE /internships/{internship_id} - Delete internship (cleans up applications)
GET /internships/{internship_id}/applicants - Ranked applicant list
PUT /internships/{internship_id}/applicants/{student_id}/status - Accept/reject
"""

from fastapi import APIRouter, Depends
from typing import List

from talentflow.services.company_service import CompanyService, get_company_service
from talentflow.schemas.schemas import (
    InternshipRecord, InternshipUpdate, InternshipResponse, ApplicantResponse,
    ApplicantStatusUpdate, MessageResponse
)

router = APIRouter(prefix="/internships", tags=["Internships"])


def to_internship_response(internship: InternshipRecord) -> InternshipResponse:
    return InternshipResponse(
        applicant_count=len(internship.applicants),
        **internship.model_dump(exclude={"applicants"})
    )


@router.get("/{internship_id}", response_model=InternshipResponse)
async def get_internship(internship_id: str, service: CompanyService = Depends(get_company_service)):
    """Get details of a specific internship."""
    return to_internship_response(service.get_internship(internship_id))


@router.put("/{internship_id}", response_model=InternshipResponse)
async def update_internship(
    internship_id: str,
    update: InternshipUpdate,
    service: CompanyService = Depends(get_company_service)
):
    """Update an internship. Set is_active=false to stop accepting applications."""
    return to_internship_response(service.update_internship(internship_id, update))


@router.delete("/{internship_id}", response_model=MessageResponse)
async def delete_internship(internship_id: str, service: CompanyService = Depends(get_company_service)):
    """Delete an internship. Removes it from every applicant's applications."""
    service.delete_internship(internship_id)
    return MessageResponse(message="Internship deleted successfully")


@router.get("/{internship_id}/applicants", response_model=List[ApplicantResponse])
async def get_applicants(internship_id: str, service: CompanyService = Depends(get_company_service)):
    """
    Applicants ranked for review.

    final_score = 50% match + 30% resume score + 20% skill density.
    Badges go by position: 1st "top", 2nd "strong", rest "potential".
    Scores are recomputed on every request.
    """
    return service.get_ranked_applicants(internship_id)


@router.put("/{internship_id}/applicants/{student_id}/status", response_model=MessageResponse)
async def update_applicant_status(
    internship_id: str,
    student_id: str,
    update: ApplicantStatusUpdate,
    service: CompanyService = Depends(get_company_service)
):
    """Accept or reject an applicant."""
    service.update_applicant_status(internship_id, student_id, update.status)
    return MessageResponse(message=f"Status updated to '{update.status.value}'")
