"""
MongoDB Service - Repositories for the portal's document collections.

Collections in this database:
1. students     - Student profiles, skills, resume text
2. companies    - Company profiles
3. internships  - Internship postings with embedded applicants

Every repository reads documents into the typed records from
talentflow.schemas (StudentRecord, CompanyRecord, InternshipRecord), so the
services above never see raw dicts or missing fields.

The portal services take these repositories in their constructor.
Tests pass in-memory repositories with the same methods instead.
"""

import logging
from typing import Optional, List, Any

from pydantic_core import to_jsonable_python
from pymongo.collection import Collection

from talentflow.db.mongodb import get_collection, COLLECTIONS
from talentflow.schemas.schemas import StudentRecord, CompanyRecord, InternshipRecord

logger = logging.getLogger(__name__)

# Never return Mongo's own _id; we key documents on our "id" field
_PROJECTION = {"_id": False}


def to_document(value: Any) -> Any:
    """Convert records/enums/lists of records into plain BSON-friendly values."""
    return to_jsonable_python(value)


# ============================================================
# STUDENTS COLLECTION
# ============================================================

class StudentRepository:
    """
    Handles student document storage.
    """

    def __init__(self, collection: Optional[Collection] = None):
        if collection is None:
            collection = get_collection(COLLECTIONS["students"])
        self.collection: Collection = collection

    def get(self, student_id: str) -> Optional[StudentRecord]:
        """Fetch a student by id."""
        doc = self.collection.find_one({"id": student_id}, _PROJECTION)
        return StudentRecord(**doc) if doc else None

    def insert(self, record: StudentRecord) -> str:
        """Insert a new student. Returns the student id."""
        self.collection.insert_one(to_document(record))
        logger.debug("Inserted student %s", record.id)
        return record.id

    def update(self, student_id: str, fields: dict) -> bool:
        """
        Set the given fields on a student.

        Returns:
            True if the student exists
        """
        result = self.collection.update_one(
            {"id": student_id},
            {"$set": to_document(fields)}
        )
        return result.matched_count > 0


# ============================================================
# COMPANIES COLLECTION
# ============================================================

class CompanyRepository:
    """
    Handles company document storage.
    """

    def __init__(self, collection: Optional[Collection] = None):
        if collection is None:
            collection = get_collection(COLLECTIONS["companies"])
        self.collection: Collection = collection

    def get(self, company_id: str) -> Optional[CompanyRecord]:
        doc = self.collection.find_one({"id": company_id}, _PROJECTION)
        return CompanyRecord(**doc) if doc else None

    def insert(self, record: CompanyRecord) -> str:
        self.collection.insert_one(to_document(record))
        logger.debug("Inserted company %s", record.id)
        return record.id

    def update(self, company_id: str, fields: dict) -> bool:
        result = self.collection.update_one(
            {"id": company_id},
            {"$set": to_document(fields)}
        )
        return result.matched_count > 0


# ============================================================
# INTERNSHIPS COLLECTION
# ============================================================

class InternshipRepository:
    """
    Handles internship document storage.
    Applicants live inside the internship document (applicants[]).
    """

    def __init__(self, collection: Optional[Collection] = None):
        if collection is None:
            collection = get_collection(COLLECTIONS["internships"])
        self.collection: Collection = collection

    def get(self, internship_id: str) -> Optional[InternshipRecord]:
        doc = self.collection.find_one({"id": internship_id}, _PROJECTION)
        return InternshipRecord(**doc) if doc else None

    def list_active(self) -> List[InternshipRecord]:
        """Every active internship, oldest first (stable suggestion order)."""
        cursor = self.collection.find({"is_active": True}, _PROJECTION).sort("created_at", 1)
        return [InternshipRecord(**doc) for doc in cursor]

    def list_by_company(self, company_id: str) -> List[InternshipRecord]:
        cursor = self.collection.find({"company_id": company_id}, _PROJECTION).sort("created_at", 1)
        return [InternshipRecord(**doc) for doc in cursor]

    def insert(self, record: InternshipRecord) -> str:
        self.collection.insert_one(to_document(record))
        logger.debug("Inserted internship %s", record.id)
        return record.id

    def update(self, internship_id: str, fields: dict) -> bool:
        result = self.collection.update_one(
            {"id": internship_id},
            {"$set": to_document(fields)}
        )
        return result.matched_count > 0

    def delete(self, internship_id: str) -> bool:
        result = self.collection.delete_one({"id": internship_id})
        return result.deleted_count > 0

