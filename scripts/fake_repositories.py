"""
In-memory repositories for tests.

Same methods as the MongoDB repositories in talentflow.services.mongo_service.
Documents go through the same to_document() conversion, so whatever
MongoDB would store is what these store.
"""
import sys
sys.path.insert(0, '.')

from talentflow.schemas.schemas import StudentRecord, CompanyRecord, InternshipRecord
from talentflow.services.mongo_service import to_document


class _InMemoryCollection:
    record_type = None

    def __init__(self, docs=None):
        # dicts keep insertion order, which stands in for created_at order
        self.docs = {}
        for doc in docs or []:
            self.docs[doc["id"]] = to_document(doc)

    def get(self, record_id):
        doc = self.docs.get(record_id)
        return self.record_type(**doc) if doc else None

    def _records(self):
        return [self.record_type(**doc) for doc in self.docs.values()]

    def insert(self, record):
        self.docs[record.id] = to_document(record)
        return record.id

    def update(self, record_id, fields):
        if record_id not in self.docs:
            return False
        self.docs[record_id].update(to_document(fields))
        return True

    def delete(self, record_id):
        return self.docs.pop(record_id, None) is not None


class InMemoryStudentRepository(_InMemoryCollection):
    record_type = StudentRecord


class InMemoryCompanyRepository(_InMemoryCollection):
    record_type = CompanyRecord


class InMemoryInternshipRepository(_InMemoryCollection):
    record_type = InternshipRecord

    def list_active(self):
        return [i for i in self._records() if i.is_active]

    def list_by_company(self, company_id):
        return [i for i in self._records() if i.company_id == company_id]


def make_repositories(students=None, companies=None, internships=None):
    """Build the three repositories from lists of raw documents."""
    return (
        InMemoryStudentRepository(students),
        InMemoryInternshipRepository(internships),
        InMemoryCompanyRepository(companies),
    )
