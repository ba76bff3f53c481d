"""
Company Service

PURPOSE:
Company-side operations: profile, internship postings, the ranked
applicant review queue, applicant status and hiring analytics.

RANKING PASS (get_ranked_applicants):
1. Load the internship and each applicant's current student document
2. Match the applicant's skills against the required skills
3. Compute skill density from the resume text
4. Blend match %, resume score and density into a final score
5. Rank and badge (top / strong / potential)

Nothing from a ranking pass is stored. Scores always reflect the
documents as they are right now.
"""

import logging
import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import List, Optional

from talentflow.core.config import get_settings
from talentflow.core.errors import NotFoundError
from talentflow.schemas.schemas import (
    CompanyRecord, CompanyCreate, CompanyUpdate, InternshipRecord,
    InternshipCreate, InternshipUpdate, StudentRecord, ApplicantEntry,
    ApplicationStatus
)
from talentflow.services.matching_service import (
    ScoreWeights, calculate_match, skill_density, score_candidate,
    rank_candidates, round_half_up
)
from talentflow.services.mongo_service import (
    StudentRepository, InternshipRepository, CompanyRepository
)
from talentflow.services.student_service import student_skill_set

logger = logging.getLogger(__name__)


def _student_for_applicant(entry: ApplicantEntry, student: Optional[StudentRecord]) -> StudentRecord:
    """The applicant's student document, or a stand-in built from the entry."""
    if student is not None:
        return student
    return StudentRecord(id=entry.student_id, name=entry.student_name, email=entry.email)


def _skills_in_profile_order(student: StudentRecord) -> List[str]:
    """Normalized skills, declared ones first, then extracted, first occurrence kept."""
    tokens = (str(s).strip().lower() for s in student.skills + student.extracted_skills)
    return list(dict.fromkeys(t for t in tokens if t))


class CompanyService:
    """
    Company-side operations.

    Repositories are injected so tests can use in-memory stores.
    Ranking weights default to the configured ones.
    """

    def __init__(
        self,
        students: Optional[StudentRepository] = None,
        internships: Optional[InternshipRepository] = None,
        companies: Optional[CompanyRepository] = None,
        weights: Optional[ScoreWeights] = None
    ):
        self.students = students if students is not None else StudentRepository()
        self.internships = internships if internships is not None else InternshipRepository()
        self.companies = companies if companies is not None else CompanyRepository()
        self.weights = weights if weights is not None else get_settings().score_weights

    # --------------------------------------------------------
    # Company profile
    # --------------------------------------------------------

    def create_company(self, data: CompanyCreate) -> CompanyRecord:
        record = CompanyRecord(
            id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            **data.model_dump()
        )
        self.companies.insert(record)
        logger.info("Created company %s", record.id)
        return record

    def get_company(self, company_id: str) -> CompanyRecord:
        company = self.companies.get(company_id)
        if company is None:
            raise NotFoundError("Company not found")
        return company

    def update_company(self, company_id: str, data: CompanyUpdate) -> CompanyRecord:
        self.get_company(company_id)
        updates = data.model_dump(exclude_none=True)
        if updates:
            self.companies.update(company_id, updates)
        return self.get_company(company_id)

    # --------------------------------------------------------
    # Internships
    # --------------------------------------------------------

    def post_internship(self, company_id: str, data: InternshipCreate) -> InternshipRecord:
        """
        Post a new internship.
        Stores company_name so every student sees it without a lookup.
        """
        company = self.get_company(company_id)
        fields = data.model_dump(exclude_none=True)
        record = InternshipRecord(
            id=uuid.uuid4().hex,
            company_id=company_id,
            company_name=company.company_name,
            created_at=datetime.now(timezone.utc),
            **fields
        )
        self.internships.insert(record)
        logger.info(
            "Company %s posted internship %s (%d required skills)",
            company_id, record.id, len(record.required_skills)
        )
        return record

    def list_internships(self, company_id: str) -> List[InternshipRecord]:
        self.get_company(company_id)
        return self.internships.list_by_company(company_id)

    def get_internship(self, internship_id: str) -> InternshipRecord:
        internship = self.internships.get(internship_id)
        if internship is None:
            raise NotFoundError("Internship not found")
        return internship

    def update_internship(self, internship_id: str, data: InternshipUpdate) -> InternshipRecord:
        self.get_internship(internship_id)
        updates = data.model_dump(exclude_none=True)
        if updates:
            self.internships.update(internship_id, updates)
        return self.get_internship(internship_id)

    def delete_internship(self, internship_id: str) -> None:
        """
        Delete an internship and drop it from every applicant's
        applied_internships list.
        """
        internship = self.get_internship(internship_id)
        self.internships.delete(internship_id)

        for entry in internship.applicants:
            student = self.students.get(entry.student_id)
            if student is None:
                continue
            remaining = [a for a in student.applied_internships if a.internship_id != internship_id]
            if len(remaining) != len(student.applied_internships):
                self.students.update(student.id, {"applied_internships": remaining})

        logger.info(
            "Deleted internship %s (%d applicants cleaned up)",
            internship_id, len(internship.applicants)
        )

    # --------------------------------------------------------
    # Applicant ranking
    # --------------------------------------------------------

    def get_ranked_applicants(self, internship_id: str) -> List[dict]:
        """
        Applicants for an internship, best final score first, with badges.

        Returns:
            List of dicts shaped like ApplicantResponse
        """
        internship = self.get_internship(internship_id)

        scores = []
        rows = {}
        # Keyed by position: older documents may list a student twice
        for position, entry in enumerate(internship.applicants):
            student = _student_for_applicant(entry, self.students.get(entry.student_id))
            skills = student_skill_set(student)

            match = calculate_match(skills, internship.required_skills)
            density = skill_density(skills, student.resume_text)
            scores.append(score_candidate(
                str(position),
                match.match_percentage,
                student.resume_score,
                density,
                self.weights
            ))

            rows[str(position)] = {
                "student_id": entry.student_id,
                "name": entry.student_name or student.name or "Unknown",
                "email": entry.email or student.email,
                "phone": student.phone,
                "college": student.college,
                "degree": student.degree,
                "year": student.year,
                "interests": student.interests,
                "preferred_role": student.preferred_role,
                "skills": student.skills,
                "extracted_skills": student.extracted_skills,
                "resume_filename": student.resume_filename,
                "matched_skills": match.matched_skills,
                "missing_skills": match.missing_skills,
                "application_status": entry.status
            }

        ranked = rank_candidates(scores)

        applicants = []
        for r in ranked:
            row = dict(rows[r.candidate_id])
            row.update(
                match_percentage=r.match_percentage,
                resume_score=r.resume_score,
                skill_density=r.skill_density,
                final_score=r.final_score,
                rank=r.rank,
                ranking_badge=r.ranking_badge.value
            )
            applicants.append(row)

        logger.info(
            "Ranked applicants for internship %s",
            internship_id,
            extra={"internship_id": internship_id, "applicant_count": len(applicants)}
        )
        return applicants

    def update_applicant_status(
        self,
        internship_id: str,
        student_id: str,
        status: ApplicationStatus
    ) -> None:
        """
        Set an applicant's status on the internship and mirror it into
        the student's applied_internships.
        """
        internship = self.get_internship(internship_id)

        applicants = list(internship.applicants)
        index = next((i for i, a in enumerate(applicants) if a.student_id == student_id), None)
        if index is None:
            raise NotFoundError("Applicant not found")
        applicants[index] = applicants[index].model_copy(update={"status": status})
        self.internships.update(internship_id, {"applicants": applicants})

        student = self.students.get(student_id)
        if student is not None:
            applied = [
                a.model_copy(update={"status": status}) if a.internship_id == internship_id else a
                for a in student.applied_internships
            ]
            self.students.update(student_id, {"applied_internships": applied})

        # Stand-in for the SMS/email notification
        logger.info(
            "Notify student %s: %s has %s your application for '%s'",
            student_id, internship.company_name, status.value, internship.role
        )

    # --------------------------------------------------------
    # Analytics
    # --------------------------------------------------------

    def get_internship_analytics(self, company_id: str) -> dict:
        """
        Totals across every internship the company posted.

        Returns:
            total_applicants, avg_match (1 decimal), highest_score,
            most_common_skill, growth_chart (applications per day)
        """
        internships = self.list_internships(company_id)

        total_applicants = 0
        match_sum = 0
        highest_score = 0.0
        skill_counts = Counter()
        per_day = Counter()

        for internship in internships:
            for entry in internship.applicants:
                total_applicants += 1
                student = _student_for_applicant(entry, self.students.get(entry.student_id))
                skills = student_skill_set(student)

                match = calculate_match(skills, internship.required_skills)
                match_sum += match.match_percentage

                density = skill_density(skills, student.resume_text)
                score = score_candidate(
                    entry.student_id, match.match_percentage,
                    student.resume_score, density, self.weights
                )
                highest_score = max(highest_score, score.final_score)

                skill_counts.update(_skills_in_profile_order(student))
                if entry.applied_at:
                    per_day[entry.applied_at.date().isoformat()] += 1

        # Counter.most_common keeps first-seen order among equal counts,
        # so ties go to the skill seen first across applicants
        most_common = skill_counts.most_common(1)

        return {
            "company_id": company_id,
            "total_applicants": total_applicants,
            "avg_match": round_half_up(match_sum / total_applicants, 1) if total_applicants else 0,
            "highest_score": highest_score,
            "most_common_skill": most_common[0][0] if most_common else "",
            "growth_chart": [
                {"date": day, "count": count} for day, count in sorted(per_day.items())
            ]
        }


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_company_service() -> CompanyService:
    """Get company service instance."""
    return CompanyService()
