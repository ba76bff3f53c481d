"""
Student Service

PURPOSE:
Everything a student does on the portal: profile, resume, skills,
internship suggestions and applications.

Suggestions and applied-internship lists are scored on every call from
the current documents. Match results are never written back to MongoDB,
so a company editing its required skills shows up on the next request.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Set, Tuple

from talentflow.core.errors import NotFoundError, ConflictError
from talentflow.schemas.schemas import (
    StudentRecord, StudentCreate, StudentUpdate, InternshipRecord,
    ApplicantEntry, AppliedInternship, ApplicationStatus
)
from talentflow.services.matching_service import (
    normalize_skills, calculate_match, skill_density
)
from talentflow.services.mongo_service import (
    StudentRepository, InternshipRepository, CompanyRepository
)
from talentflow.services.skill_extractor import extract_skills_from_text

logger = logging.getLogger(__name__)

# Fields that must all be filled for the "basic info" part of completion
PROFILE_BASIC_FIELDS = [
    "name", "email", "phone", "college", "degree", "year", "interests", "preferred_role"
]


# ============================================================
# HELPERS
# ============================================================

def student_skill_set(student: StudentRecord) -> Set[str]:
    """Declared + resume-extracted skills, normalized."""
    return normalize_skills(student.skills, student.extracted_skills)


def compute_profile_completion(student: StudentRecord) -> int:
    """
    Rough 0-100 measure of how complete a profile is.

    +20 all basic fields filled
    +20 at least one skill (declared or extracted)
    +30 resume uploaded
    +10 interests filled
    +20 at least one experience entry
    """
    completion = 0
    if all(getattr(student, f) for f in PROFILE_BASIC_FIELDS):
        completion += 20
    if student.skills or student.extracted_skills:
        completion += 20
    if student.resume_filename or student.resume_text:
        completion += 30
    if student.interests:
        completion += 10
    if student.experience:
        completion += 20
    return min(100, completion)


def _internship_view(internship: InternshipRecord, company_industry: str, student_skills: Set[str]) -> dict:
    """Internship fields plus this student's match against it."""
    match = calculate_match(student_skills, internship.required_skills)
    view = internship.model_dump(exclude={"applicants"})
    view.update(
        applicant_count=len(internship.applicants),
        company_industry=company_industry,
        match_percentage=match.match_percentage,
        matched_skills=match.matched_skills,
        missing_skills=match.missing_skills
    )
    return view


# ============================================================
# STUDENT SERVICE
# ============================================================

class StudentService:
    """
    Student-side operations.

    Repositories are injected so tests can use in-memory stores.
    """

    def __init__(
        self,
        students: Optional[StudentRepository] = None,
        internships: Optional[InternshipRepository] = None,
        companies: Optional[CompanyRepository] = None
    ):
        self.students = students if students is not None else StudentRepository()
        self.internships = internships if internships is not None else InternshipRepository()
        self.companies = companies if companies is not None else CompanyRepository()

    # --------------------------------------------------------
    # Profile
    # --------------------------------------------------------

    def create_profile(self, data: StudentCreate) -> StudentRecord:
        record = StudentRecord(
            id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            **data.model_dump()
        )
        self.students.insert(record)
        logger.info("Created student profile %s", record.id)
        return record

    def get_profile(self, student_id: str) -> StudentRecord:
        student = self.students.get(student_id)
        if student is None:
            raise NotFoundError("Student not found")
        return student

    def update_profile(self, student_id: str, data: StudentUpdate) -> StudentRecord:
        """Update only the provided fields."""
        self.get_profile(student_id)
        updates = data.model_dump(exclude_none=True)
        if updates:
            self.students.update(student_id, updates)
        return self.get_profile(student_id)

    def save_resume(self, student_id: str, resume_text: str, filename: Optional[str] = None) -> Tuple[List[str], float]:
        """
        Store resume text and the skills found in it.

        Replaces any previously extracted skills; declared skills are kept.

        Returns:
            (extracted_skills, skill_density over all the student's skills)
        """
        student = self.get_profile(student_id)
        extracted = extract_skills_from_text(resume_text)

        self.students.update(student_id, {
            "extracted_skills": extracted,
            "resume_text": resume_text,
            "resume_filename": filename
        })

        all_skills = normalize_skills(student.skills, extracted)
        density = skill_density(all_skills, resume_text)
        logger.info(
            "Resume saved for student %s: %d skills extracted, density %.2f",
            student_id, len(extracted), density
        )
        return extracted, density

    def get_all_skills(self, student_id: str) -> List[str]:
        """Declared + extracted skills, deduplicated, alphabetical."""
        return sorted(student_skill_set(self.get_profile(student_id)))

    # --------------------------------------------------------
    # Suggestions
    # --------------------------------------------------------

    def _company_industries(self, internships: List[InternshipRecord]) -> dict:
        industries = {}
        for internship in internships:
            if internship.company_id not in industries:
                company = self.companies.get(internship.company_id)
                industries[internship.company_id] = company.industry if company else ""
        return industries

    def get_suggested_internships(self, student_id: str) -> List[dict]:
        """
        Every active internship, best match first.

        Internships with the same match % keep repository order.
        """
        skills = student_skill_set(self.get_profile(student_id))
        internships = self.internships.list_active()
        industries = self._company_industries(internships)

        suggestions = [
            _internship_view(i, industries[i.company_id], skills)
            for i in internships
        ]
        suggestions.sort(key=lambda s: s["match_percentage"], reverse=True)
        return suggestions

    # --------------------------------------------------------
    # Applications
    # --------------------------------------------------------

    def apply_to_internship(self, student_id: str, internship_id: str) -> dict:
        """
        Apply a student to an internship.

        Records the application on both sides: internship.applicants[]
        and student.applied_internships[].

        Raises:
            NotFoundError: student or internship missing
            ConflictError: already applied, or internship closed
        """
        student = self.get_profile(student_id)
        internship = self.internships.get(internship_id)
        if internship is None:
            raise NotFoundError("Internship not found")
        if not internship.is_active:
            raise ConflictError("Internship is not accepting applications")

        already_applied = (
            any(a.internship_id == internship_id for a in student.applied_internships) or
            any(a.student_id == student_id for a in internship.applicants)
        )
        if already_applied:
            raise ConflictError("Already applied to this internship")

        now = datetime.now(timezone.utc)
        applicants = internship.applicants + [ApplicantEntry(
            student_id=student_id,
            student_name=student.name,
            email=student.email,
            status=ApplicationStatus.pending,
            applied_at=now
        )]
        applied = student.applied_internships + [AppliedInternship(
            internship_id=internship_id,
            status=ApplicationStatus.pending,
            applied_at=now
        )]
        self.internships.update(internship_id, {"applicants": applicants})
        self.students.update(student_id, {"applied_internships": applied})

        match = calculate_match(student_skill_set(student), internship.required_skills)
        logger.info(
            "Student %s applied to internship %s (match %d%%)",
            student_id, internship_id, match.match_percentage
        )
        return {
            "internship_id": internship_id,
            "status": ApplicationStatus.pending,
            "match_percentage": match.match_percentage
        }

    def get_applied_internships(self, student_id: str) -> List[dict]:
        """
        Internships the student applied to, with the latest status.

        The company's applicants[] entry is the source of truth for
        status; the student's own copy is used only if it is missing.
        Internships deleted since are skipped.
        """
        student = self.get_profile(student_id)
        skills = student_skill_set(student)

        results = []
        for applied in student.applied_internships:
            internship = self.internships.get(applied.internship_id)
            if internship is None:
                continue

            entry = next((a for a in internship.applicants if a.student_id == student_id), None)
            status = entry.status if entry else applied.status

            industries = self._company_industries([internship])
            view = _internship_view(internship, industries[internship.company_id], skills)
            view["application_status"] = status
            results.append(view)

        return results


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_student_service() -> StudentService:
    """Get student service instance."""
    return StudentService()
