"""
MongoDB Connection Utility

MongoDB stores every portal record:
- users, candidate / employer profiles
- internships and saved internships (bookmarks)
- applications and the messages exchanged on them

The client is built once by the app factory (create_app) and kept on
app.state; request handlers receive the database through get_db().
"""
import logging

from fastapi import Request
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from internship_portal.core.config import Settings

logger = logging.getLogger(__name__)


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "candidate_profiles": "candidateprofiles",
    "employer_profiles": "employerprofiles",
    "internships": "internships",
    "applications": "applications",
    "saved_internships": "savedinternships",
    "messages": "messages",
}


def create_mongo_client(settings: Settings) -> MongoClient:
    """Create a MongoDB client (connection pooling handled internally by pymongo)."""
    return MongoClient(settings.mongodb_uri)


def get_mongo_db(client: MongoClient, settings: Settings) -> Database:
    """Get the portal database from a client."""
    return client[settings.mongodb_db]


def get_db(request: Request) -> Database:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/internships")
        def list_internships(db: Database = Depends(get_db)):
            ...
    """
    return request.app.state.db


def get_collection(db: Database, key: str) -> Collection:
    """Get a collection by its COLLECTIONS key."""
    return db[COLLECTIONS[key]]


def test_mongo_connection(client: MongoClient) -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes(db: Database) -> None:
    """
    Create indexes. Call this once during app startup.

    The (candidate_id, internship_id) index on applications is what keeps
    "one application per candidate and internship" true under concurrent
    submissions; the service-level pre-check only gives a nicer error.
    """
    get_collection(db, "users").create_index("email", unique=True)

    get_collection(db, "candidate_profiles").create_index("user_id", unique=True)
    get_collection(db, "employer_profiles").create_index("user_id", unique=True)

    internships = get_collection(db, "internships")
    internships.create_index("company_id")
    internships.create_index("location")
    internships.create_index("required_skills")

    applications = get_collection(db, "applications")
    applications.create_index(
        [("candidate_id", ASCENDING), ("internship_id", ASCENDING)],
        unique=True
    )
    applications.create_index("internship_id")

    get_collection(db, "saved_internships").create_index(
        [("user_id", ASCENDING), ("internship_id", ASCENDING)],
        unique=True
    )

    messages = get_collection(db, "messages")
    messages.create_index("sender_id")
    messages.create_index("receiver_id")
    messages.create_index([("createdAt", DESCENDING)])

    logger.info("MongoDB indexes created successfully")
