"""
Database module - MongoDB connection.
"""
from internship_portal.db.mongodb import (
    COLLECTIONS,
    create_mongo_client,
    get_db,
    get_mongo_db,
    init_mongo_indexes,
    test_mongo_connection,
)

__all__ = [
    "COLLECTIONS",
    "create_mongo_client",
    "get_db",
    "get_mongo_db",
    "init_mongo_indexes",
    "test_mongo_connection",
]
