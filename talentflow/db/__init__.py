"""
Database module - MongoDB connection.
"""
from talentflow.db.mongodb import get_mongo_db, check_mongo_connection

__all__ = [
    "get_mongo_db",
    "check_mongo_connection"
]
