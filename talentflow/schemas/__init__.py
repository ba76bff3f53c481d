"""
Schemas module - typed records and the API contract.

- Records: StudentRecord, CompanyRecord, InternshipRecord as stored in MongoDB
- Requests/responses: what the API accepts and returns
"""
