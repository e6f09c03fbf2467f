"""
Profile Service

Candidate and employer profiles are created on first write (profile upsert
or resume upload). Fields left out of an update keep their stored value.
"""

import logging
from typing import Optional

from fastapi import UploadFile
from pymongo.database import Database

from internship_portal.core.errors import NotFoundError, ValidationError
from internship_portal.core.policy import Actor, enforce, require_role
from internship_portal.schemas.schemas import ProfileUpdate, Role
from internship_portal.services.mongo_service import (
    CandidateProfileStore,
    EmployerProfileStore,
    ProfileStore,
    UserStore,
)
from internship_portal.utils.file_upload import BlobStorage

logger = logging.getLogger(__name__)

CANDIDATE_FIELDS = ("skills", "education", "experience")
EMPLOYER_FIELDS = ("company", "industry", "website", "description")


class ProfileService:

    def __init__(self, db: Database, storage: Optional[BlobStorage] = None):
        self.candidates = CandidateProfileStore(db)
        self.employers = EmployerProfileStore(db)
        self.users = UserStore(db)
        self.storage = storage

    def _store_for(self, actor: Actor) -> ProfileStore:
        return self.candidates if actor.role == Role.candidate else self.employers

    def get_profile(self, actor: Actor) -> dict:
        profile = self._store_for(actor).get_by_user(actor.user_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    def upsert_profile(self, actor: Actor, data: ProfileUpdate) -> dict:
        """Write the fields that belong to the actor's role; ignore the rest."""
        allowed = CANDIDATE_FIELDS if actor.role == Role.candidate else EMPLOYER_FIELDS
        fields = {
            key: value
            for key, value in data.model_dump(exclude_none=True).items()
            if key in allowed
        }
        return self._store_for(actor).upsert(actor.user_id, fields)

    async def upload_resume(self, actor: Actor, file: Optional[UploadFile]) -> str:
        enforce(require_role(actor, Role.candidate), actor)
        if file is None or not file.filename:
            raise ValidationError("No file uploaded")

        resume_url = await self.storage.save_resume(file, prefix=actor.user_id)
        self.candidates.upsert(actor.user_id, {"resume_url": resume_url})
        return resume_url

    async def upload_profile_image(self, actor: Actor, file: Optional[UploadFile]) -> str:
        if file is None or not file.filename:
            raise ValidationError("No file uploaded")

        if not self.users.get_by_id(actor.user_id):
            raise NotFoundError("User not found")
        path = await self.storage.save_image(file, prefix=actor.user_id)
        self.users.set_profile_image(actor.user_id, path)
        logger.info("User %s updated profile image", actor.user_id)
        return path
