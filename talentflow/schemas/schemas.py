"""
Pydantic Schemas - Stored Records and Request/Response Validation

All schemas in one file for simplicity.

Records (StudentRecord, InternshipRecord, ...) describe documents as they
come out of MongoDB. Every optional field has a default here, so the
services never have to check whether a field is present.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class ApplicationStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


def _coerce_status(value):
    # Older documents stored the initial status as "Applied"
    if value is None or str(value).lower() == "applied":
        return ApplicationStatus.pending.value
    return value


# ============================================================
# STORED RECORDS
# ============================================================

class ApplicantEntry(BaseModel):
    """One applicant inside internship.applicants[]."""
    student_id: str
    student_name: str = ""
    email: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.pending
    applied_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def legacy_status(cls, v):
        return _coerce_status(v)


class AppliedInternship(BaseModel):
    """One entry in student.applied_internships[]."""
    internship_id: str
    status: ApplicationStatus = ApplicationStatus.pending
    applied_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def legacy_status(cls, v):
        return _coerce_status(v)


class StudentRecord(BaseModel):
    id: str
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    college: Optional[str] = None
    degree: Optional[str] = None
    year: Optional[str] = None
    interests: Optional[str] = None
    preferred_role: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    extracted_skills: List[str] = Field(default_factory=list)
    resume_text: str = ""
    resume_filename: Optional[str] = None
    resume_score: float = 0
    experience: List[dict] = Field(default_factory=list)
    applied_internships: List[AppliedInternship] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @field_validator("year", mode="before")
    @classmethod
    def year_as_text(cls, v):
        return str(v) if v is not None else None

    @field_validator("skills", "extracted_skills", "experience", "applied_internships", mode="before")
    @classmethod
    def none_as_empty_list(cls, v):
        return v if v is not None else []

    @field_validator("resume_text", mode="before")
    @classmethod
    def none_as_empty_text(cls, v):
        return v if v is not None else ""

    @field_validator("resume_score", mode="before")
    @classmethod
    def missing_score_is_zero(cls, v):
        return v if v is not None else 0


class CompanyRecord(BaseModel):
    id: str
    company_name: str
    email: Optional[str] = None
    industry: str = ""
    website: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("industry", mode="before")
    @classmethod
    def none_as_empty_text(cls, v):
        return v if v is not None else ""


class InternshipRecord(BaseModel):
    id: str
    company_id: str
    company_name: str = "Unknown"
    role: str
    description: Optional[str] = None
    required_skills: List[str] = Field(default_factory=list)
    stipend: str = "Unpaid"
    duration: str = "Not specified"
    location: str = "Remote"
    is_active: bool = True
    applicants: List[ApplicantEntry] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @field_validator("required_skills", "applicants", mode="before")
    @classmethod
    def none_as_empty_list(cls, v):
        return v if v is not None else []


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    college: Optional[str] = None
    degree: Optional[str] = None
    year: Optional[str] = None
    interests: Optional[str] = None
    preferred_role: Optional[str] = None
    skills: List[str] = []

class StudentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = None
    college: Optional[str] = None
    degree: Optional[str] = None
    year: Optional[str] = None
    interests: Optional[str] = None
    preferred_role: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[List[dict]] = None
    resume_score: Optional[float] = Field(None, ge=0, le=100)

class StudentResponse(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    college: Optional[str] = None
    degree: Optional[str] = None
    year: Optional[str] = None
    interests: Optional[str] = None
    preferred_role: Optional[str] = None
    skills: List[str] = []
    extracted_skills: List[str] = []
    resume_uploaded: bool = False
    resume_score: float = 0
    profile_completion: int = 0
    created_at: Optional[datetime] = None

class SkillsResponse(BaseModel):
    student_id: str
    skills: List[str]
    total: int


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyCreate(BaseModel):
    company_name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    industry: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None

class CompanyUpdate(BaseModel):
    company_name: Optional[str] = Field(None, min_length=2, max_length=200)
    industry: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None

class CompanyResponse(BaseModel):
    id: str
    company_name: str
    email: Optional[str] = None
    industry: str = ""
    website: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


# ============================================================
# INTERNSHIP SCHEMAS
# ============================================================

class InternshipCreate(BaseModel):
    role: str = Field(..., min_length=2, max_length=200)
    description: Optional[str] = None
    required_skills: List[str] = []
    stipend: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None

class InternshipUpdate(BaseModel):
    role: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = None
    required_skills: Optional[List[str]] = None
    stipend: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None
    is_active: Optional[bool] = None

class InternshipResponse(BaseModel):
    id: str
    company_id: str
    company_name: str
    role: str
    description: Optional[str] = None
    required_skills: List[str] = []
    stipend: str
    duration: str
    location: str
    is_active: bool
    applicant_count: int = 0
    created_at: Optional[datetime] = None


# ============================================================
# MATCHING SCHEMAS
# ============================================================

class SuggestionResponse(InternshipResponse):
    """An internship as seen by a student, with their match against it."""
    company_industry: str = ""
    match_percentage: int
    matched_skills: List[str] = []
    missing_skills: List[str] = []

class AppliedInternshipResponse(SuggestionResponse):
    application_status: ApplicationStatus

class ApplicantResponse(BaseModel):
    """One row of a company's ranked applicant list."""
    student_id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    college: Optional[str] = None
    degree: Optional[str] = None
    year: Optional[str] = None
    interests: Optional[str] = None
    preferred_role: Optional[str] = None
    skills: List[str] = []
    extracted_skills: List[str] = []
    resume_filename: Optional[str] = None
    match_percentage: int
    matched_skills: List[str] = []
    missing_skills: List[str] = []
    resume_score: float
    skill_density: float
    final_score: float
    rank: int
    ranking_badge: str
    application_status: ApplicationStatus

class GrowthPoint(BaseModel):
    date: str
    count: int

class InternshipAnalyticsResponse(BaseModel):
    company_id: str
    total_applicants: int
    avg_match: float
    highest_score: float
    most_common_skill: str
    growth_chart: List[GrowthPoint] = []


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    internship_id: str

class ApplicationResponse(BaseModel):
    internship_id: str
    status: ApplicationStatus
    match_percentage: int

class ApplicantStatusUpdate(BaseModel):
    status: ApplicationStatus


# ============================================================
# RESUME SCHEMAS
# ============================================================

class ResumeUploadResponse(BaseModel):
    success: bool
    message: str
    filename: Optional[str] = None
    extracted_skills: List[str] = []
    word_count: int = 0
    skill_density: float = 0


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
