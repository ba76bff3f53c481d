"""
TalentFlow Internship Portal
Matches students to internships by skills and ranks applicants for companies.

Architecture:
- MongoDB: Students, companies, internships (applicants embedded)
- services/matching_service.py: Pure scoring and ranking, no I/O
- FastAPI: HTTP surface over the student and company services
"""

__version__ = "1.0.0"
