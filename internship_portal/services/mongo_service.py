"""
MongoDB Service - CRUD operations for the portal collections.

Collections in this database:
1. users              - Accounts (Candidate / Employer)
2. candidateprofiles  - Skills, education, experience, resume reference
3. employerprofiles   - Company details
4. internships        - Postings owned by an employer (company_id)
5. applications       - Candidate -> internship, with a status
6. savedinternships   - Candidate bookmarks
7. messages           - Notes exchanged on an application

Every store method returns serialized documents: ObjectIds become strings,
so the rest of the app compares ids as plain strings.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from internship_portal.core.errors import ConflictError, NotFoundError
from internship_portal.db.mongodb import get_collection


# ============================================================
# HELPERS: ObjectId conversion and JSON serialization
# ============================================================

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(value: Any, entity: str = "Resource") -> ObjectId:
    """Parse an id string. Malformed ids can't match anything, so they are a 404."""
    if isinstance(value, ObjectId):
        return value
    if value is None or not ObjectId.is_valid(str(value)):
        raise NotFoundError(f"{entity} not found")
    return ObjectId(str(value))


def serialize_doc(doc: Any) -> Any:
    """Convert MongoDB document (recursively) to a JSON-serializable value."""
    if doc is None:
        return None
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, dict):
        return {key: serialize_doc(value) for key, value in doc.items()}
    if isinstance(doc, list):
        return [serialize_doc(value) for value in doc]
    return doc


def serialize_docs(docs: Iterable[dict]) -> List[dict]:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def populate(
    docs: List[dict],
    field: str,
    collection: Collection,
    projection: Optional[dict] = None
) -> List[dict]:
    """
    Replace the id stored in docs[field] with the referenced document.

    Missing references become None (a deleted internship, for example).
    Already expanded references are left alone. Each doc gets its own copy
    of the referenced document, so later expansions don't leak between docs.
    Works in place and returns docs for chaining.
    """
    ids = {
        ObjectId(doc[field]) for doc in docs
        if isinstance(doc.get(field), str) and ObjectId.is_valid(doc[field])
    }
    found = {}
    if ids:
        cursor = collection.find({"_id": {"$in": list(ids)}}, projection)
        found = {str(ref["_id"]): serialize_doc(ref) for ref in cursor}

    for doc in docs:
        value = doc.get(field)
        if value is None or isinstance(value, dict):
            continue
        ref = found.get(str(value))
        doc[field] = dict(ref) if ref is not None else None
    return docs


# ============================================================
# USERS COLLECTION
# ============================================================

# Never send password hashes back out
PUBLIC_USER_FIELDS = {"password": 0}


class UserStore:
    """Account records. Role is fixed at registration."""

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "users")

    def insert(self, name: str, email: str, password_hash: str, role: str) -> dict:
        now = utc_now()
        doc = {
            "name": name,
            "email": email,
            "password": password_hash,
            "role": role,
            "profileImage": None,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("Email already registered")
        doc["_id"] = result.inserted_id
        doc.pop("password")
        return serialize_doc(doc)

    def get_by_id(self, user_id: str) -> Optional[dict]:
        doc = self.collection.find_one(
            {"_id": to_object_id(user_id, "User")}, PUBLIC_USER_FIELDS
        )
        return serialize_doc(doc)

    def get_by_email(self, email: str) -> Optional[dict]:
        """Includes the password hash, for login only."""
        return serialize_doc(self.collection.find_one({"email": email}))

    def set_profile_image(self, user_id: str, path: str) -> Optional[dict]:
        doc = self.collection.find_one_and_update(
            {"_id": to_object_id(user_id, "User")},
            {"$set": {"profileImage": path, "updatedAt": utc_now()}},
            projection=PUBLIC_USER_FIELDS,
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# PROFILE COLLECTIONS
# Created lazily on first write; missing fields keep prior values
# ============================================================

class ProfileStore:
    """Shared upsert logic for candidate and employer profiles."""

    collection_key: str = None
    # Values written only when the profile is first created
    insert_defaults: Dict[str, Any] = {}

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, self.collection_key)

    def get_by_user(self, user_id: str) -> Optional[dict]:
        doc = self.collection.find_one({"user_id": to_object_id(user_id, "User")})
        return serialize_doc(doc)

    def upsert(self, user_id: str, fields: Dict[str, Any]) -> dict:
        """
        Create or update the profile for user_id.

        Only keys present in `fields` are written; pass None-free dicts.
        """
        now = utc_now()
        on_insert = {"createdAt": now}
        for key, value in self.insert_defaults.items():
            if key not in fields:
                on_insert[key] = value

        doc = self.collection.find_one_and_update(
            {"user_id": to_object_id(user_id, "User")},
            {
                "$set": {**fields, "updatedAt": now},
                "$setOnInsert": on_insert,
            },
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


class CandidateProfileStore(ProfileStore):
    collection_key = "candidate_profiles"
    insert_defaults = {"skills": [], "education": None, "experience": None, "resume_url": None}


class EmployerProfileStore(ProfileStore):
    collection_key = "employer_profiles"
    insert_defaults = {"company": None, "industry": None, "website": None, "description": None}


# ============================================================
# INTERNSHIPS COLLECTION
# ============================================================

class InternshipStore:
    """Internship postings. company_id is the owning employer's user id."""

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "internships")

    def insert(self, company_id: str, fields: Dict[str, Any]) -> dict:
        now = utc_now()
        doc = {
            **fields,
            "company_id": to_object_id(company_id, "User"),
            "posted_date": now,
            "createdAt": now,
            "updatedAt": now,
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get_by_id(self, internship_id: str) -> Optional[dict]:
        doc = self.collection.find_one({"_id": to_object_id(internship_id, "Internship")})
        return serialize_doc(doc)

    def find(self, query: Optional[dict] = None) -> List[dict]:
        """Catalog lookup in insertion order."""
        return serialize_docs(self.collection.find(query or {}).sort("_id", 1))

    def list_by_company(self, company_id: str) -> List[dict]:
        return self.find({"company_id": to_object_id(company_id, "User")})

    def update(self, internship_id: str, fields: Dict[str, Any]) -> Optional[dict]:
        doc = self.collection.find_one_and_update(
            {"_id": to_object_id(internship_id, "Internship")},
            {"$set": {**fields, "updatedAt": utc_now()}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def delete(self, internship_id: str) -> bool:
        result = self.collection.delete_one({"_id": to_object_id(internship_id, "Internship")})
        return result.deleted_count > 0


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationStore:
    """Applications. Unique on (candidate_id, internship_id) at the index level."""

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "applications")

    def insert(
        self,
        candidate_id: str,
        internship_id: str,
        status: str,
        cover_letter: Optional[str] = None,
        resume_url: Optional[str] = None,
        additional_info: Optional[str] = None
    ) -> dict:
        now = utc_now()
        doc = {
            "candidate_id": to_object_id(candidate_id, "User"),
            "internship_id": to_object_id(internship_id, "Internship"),
            "status": status,
            "cover_letter": cover_letter,
            "resume_url": resume_url,
            "additional_info": additional_info,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("You have already applied for this internship")
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get_by_id(self, application_id: str) -> Optional[dict]:
        doc = self.collection.find_one({"_id": to_object_id(application_id, "Application")})
        return serialize_doc(doc)

    def find_for(self, candidate_id: str, internship_id: str) -> Optional[dict]:
        doc = self.collection.find_one({
            "candidate_id": to_object_id(candidate_id, "User"),
            "internship_id": to_object_id(internship_id, "Internship"),
        })
        return serialize_doc(doc)

    def list_by_candidate(self, candidate_id: str) -> List[dict]:
        cursor = self.collection.find({"candidate_id": to_object_id(candidate_id, "User")})
        return serialize_docs(cursor)

    def list_by_internships(self, internship_ids: List[str]) -> List[dict]:
        if not internship_ids:
            return []
        ids = [to_object_id(i, "Internship") for i in internship_ids]
        return serialize_docs(self.collection.find({"internship_id": {"$in": ids}}))

    def set_status(self, application_id: str, status: str) -> Optional[dict]:
        doc = self.collection.find_one_and_update(
            {"_id": to_object_id(application_id, "Application")},
            {"$set": {"status": status, "updatedAt": utc_now()}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# SAVED INTERNSHIPS COLLECTION
# ============================================================

class SavedInternshipStore:
    """Candidate bookmarks. No status."""

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "saved_internships")

    def _key(self, user_id: str, internship_id: str) -> dict:
        return {
            "user_id": to_object_id(user_id, "User"),
            "internship_id": to_object_id(internship_id, "Internship"),
        }

    def find(self, user_id: str, internship_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one(self._key(user_id, internship_id)))

    def insert(self, user_id: str, internship_id: str) -> dict:
        """Save a bookmark; saving twice returns the existing one."""
        now = utc_now()
        doc = {**self._key(user_id, internship_id), "createdAt": now, "updatedAt": now}
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            return self.find(user_id, internship_id)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def list_by_user(self, user_id: str) -> List[dict]:
        cursor = self.collection.find({"user_id": to_object_id(user_id, "User")}).sort("_id", 1)
        return serialize_docs(cursor)

    def delete(self, user_id: str, internship_id: str) -> bool:
        doc = self.collection.find_one_and_delete(self._key(user_id, internship_id))
        return doc is not None


# ============================================================
# MESSAGES COLLECTION
# ============================================================

class MessageStore:
    """Messages tied to an application. Only is_read ever changes."""

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "messages")

    def insert(self, sender_id: str, receiver_id: str, application_id: str, body: str) -> dict:
        now = utc_now()
        doc = {
            "sender_id": to_object_id(sender_id, "User"),
            "receiver_id": to_object_id(receiver_id, "User"),
            "application_id": to_object_id(application_id, "Application"),
            "message": body,
            "is_read": False,
            "createdAt": now,
            "updatedAt": now,
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get_by_id(self, message_id: str) -> Optional[dict]:
        doc = self.collection.find_one({"_id": to_object_id(message_id, "Message")})
        return serialize_doc(doc)

    def list_for_user(self, user_id: str) -> List[dict]:
        """Messages the user sent or received, newest first."""
        uid = to_object_id(user_id, "User")
        cursor = self.collection.find(
            {"$or": [{"sender_id": uid}, {"receiver_id": uid}]}
        ).sort([("createdAt", -1), ("_id", -1)])
        return serialize_docs(cursor)

    def mark_read(self, message_id: str) -> Optional[dict]:
        doc = self.collection.find_one_and_update(
            {"_id": to_object_id(message_id, "Message")},
            {"$set": {"is_read": True}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# CONVENIENCE FUNCTION: Get all stores
# ============================================================

def get_stores(db: Database) -> dict:
    """
    Get all store instances bound to one database.

    Usage:
        stores = get_stores(db)
        stores['internships'].find(...)
    """
    return {
        "users": UserStore(db),
        "candidate_profiles": CandidateProfileStore(db),
        "employer_profiles": EmployerProfileStore(db),
        "internships": InternshipStore(db),
        "applications": ApplicationStore(db),
        "saved_internships": SavedInternshipStore(db),
        "messages": MessageStore(db),
    }
