"""
Student Routes

POST /students - Create student profile
GET /students/{student_id} - Get profile (with profile completion)
PUT /students/{student_id} - Update profile
POST /students/{student_id}/resume - Upload resume (PDF/DOCX/TXT)
GET /students/resume/formats - Get supported formats
GET /students/{student_id}/skills - Get merged skills
GET /students/{student_id}/suggestions - Active internships, best match first
POST /students/{student_id}/applications - Apply to an internship
GET /students/{student_id}/applications - Get my applications
"""

from fastapi import APIRouter, Depends, UploadFile, File
from typing import List

from talentflow.services.student_service import (
    StudentService, get_student_service, compute_profile_completion
)
from talentflow.utils.file_upload import read_resume, get_supported_formats
from talentflow.schemas.schemas import (
    StudentRecord, StudentCreate, StudentUpdate, StudentResponse, SkillsResponse,
    ResumeUploadResponse, SuggestionResponse, AppliedInternshipResponse,
    ApplicationCreate, ApplicationResponse
)

router = APIRouter(prefix="/students", tags=["Students"])


def _to_response(student: StudentRecord) -> StudentResponse:
    return StudentResponse(
        id=student.id, name=student.name, email=student.email, phone=student.phone,
        college=student.college, degree=student.degree, year=student.year,
        interests=student.interests, preferred_role=student.preferred_role,
        skills=student.skills, extracted_skills=student.extracted_skills,
        resume_uploaded=bool(student.resume_filename or student.resume_text),
        resume_score=student.resume_score,
        profile_completion=compute_profile_completion(student),
        created_at=student.created_at
    )


@router.post("", response_model=StudentResponse, status_code=201)
async def create_profile(data: StudentCreate, service: StudentService = Depends(get_student_service)):
    """Create a student profile."""
    return _to_response(service.create_profile(data))


@router.get("/resume/formats")
async def resume_formats():
    """Get supported resume file formats."""
    return get_supported_formats()


@router.get("/{student_id}", response_model=StudentResponse)
async def get_profile(student_id: str, service: StudentService = Depends(get_student_service)):
    """Get a student's profile with profile completion %."""
    return _to_response(service.get_profile(student_id))


@router.put("/{student_id}", response_model=StudentResponse)
async def update_profile(
    student_id: str,
    data: StudentUpdate,
    service: StudentService = Depends(get_student_service)
):
    """Update student profile. Only provided fields are updated."""
    return _to_response(service.update_profile(student_id, data))


@router.post("/{student_id}/resume", response_model=ResumeUploadResponse)
async def upload_resume(
    student_id: str,
    file: UploadFile = File(..., description="Resume file (PDF, DOCX, or TXT)"),
    service: StudentService = Depends(get_student_service)
):
    """
    Upload a resume and extract skills from it.

    Process:
    1. Extract text from file
    2. Find known skills in the text
    3. Store text + extracted skills on the student
    """
    # Fail before reading the file if the student does not exist
    service.get_profile(student_id)

    resume = await read_resume(file)
    extracted, density = service.save_resume(student_id, resume.text, resume.filename)

    return ResumeUploadResponse(
        success=True,
        message=f"Resume uploaded. {len(extracted)} skills extracted.",
        filename=resume.filename,
        extracted_skills=extracted,
        word_count=resume.word_count,
        skill_density=density
    )


@router.get("/{student_id}/skills", response_model=SkillsResponse)
async def get_skills(student_id: str, service: StudentService = Depends(get_student_service)):
    """Declared + resume-extracted skills, deduplicated and lower-cased."""
    skills = service.get_all_skills(student_id)
    return SkillsResponse(student_id=student_id, skills=skills, total=len(skills))


@router.get("/{student_id}/suggestions", response_model=List[SuggestionResponse])
async def get_suggestions(student_id: str, service: StudentService = Depends(get_student_service)):
    """
    All active internships sorted by match % (highest first).

    Each entry includes matched and missing skills for gap analysis.
    """
    return service.get_suggested_internships(student_id)


@router.post("/{student_id}/applications", response_model=ApplicationResponse, status_code=201)
async def apply(
    student_id: str,
    application: ApplicationCreate,
    service: StudentService = Depends(get_student_service)
):
    """Apply to an internship. Cannot apply twice to the same internship."""
    return service.apply_to_internship(student_id, application.internship_id)


@router.get("/{student_id}/applications", response_model=List[AppliedInternshipResponse])
async def get_my_applications(student_id: str, service: StudentService = Depends(get_student_service)):
    """Internships applied to, with current status and match."""
    return service.get_applied_internships(student_id)
