"""
MongoDB Connection Utility

MongoDB stores the portal's documents:
- students: profile, declared skills, extracted skills, resume text
- companies: company profiles
- internships: postings with their embedded applicants list

WHY MongoDB for these?
- Schema-flexible: older documents miss fields newer ones have
- Document-oriented: an internship carries its own applicants
- No joins needed: match scores are computed per request in Python
"""
import logging

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from talentflow.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get one of the COLLECTIONS below"""
    return get_mongo_db()[name]


def check_mongo_connection() -> bool:
    """Ping MongoDB. Used by /health, never raises."""
    try:
        get_mongo_client().admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "students": "students",
    "companies": "companies",
    "internships": "internships"
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Our own string ids, looked up on every request
    for name in COLLECTIONS.values():
        db[name].create_index("id", unique=True)

    # Company dashboard lists its own internships
    db[COLLECTIONS["internships"]].create_index("company_id")
    # Student suggestions scan active internships
    db[COLLECTIONS["internships"]].create_index("is_active")

    logger.info("MongoDB indexes created successfully")
