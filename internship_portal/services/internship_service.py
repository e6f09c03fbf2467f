"""
Internship Service - postings and candidate bookmarks.

Employers create, edit and delete their own postings; anyone can browse;
candidates save/unsave postings.
"""

import logging
from typing import List, Optional

from pymongo.database import Database

from internship_portal.core.errors import NotFoundError
from internship_portal.core.policy import Actor, can_manage_internship, enforce, require_role
from internship_portal.schemas.schemas import InternshipCreate, InternshipUpdate, Role
from internship_portal.services.matching_service import COMPANY_CARD_FIELDS
from internship_portal.services.mongo_service import (
    InternshipStore,
    SavedInternshipStore,
    UserStore,
    populate,
)

logger = logging.getLogger(__name__)


def build_catalog_query(location: Optional[str] = None, skills: Optional[str] = None) -> dict:
    """
    Filters for the public listing.
    location is an exact match; skills is a comma list, any of which may match.
    """
    query = {}
    if location:
        query["location"] = location
    if skills:
        wanted = [s.strip() for s in skills.split(",") if s.strip()]
        if wanted:
            query["required_skills"] = {"$in": wanted}
    return query


class InternshipService:

    def __init__(self, db: Database):
        self.internships = InternshipStore(db)
        self.saved = SavedInternshipStore(db)
        self.users = UserStore(db)

    def _with_company(self, internships: List[dict], fields: dict = COMPANY_CARD_FIELDS) -> List[dict]:
        return populate(internships, "company_id", self.users.collection, fields)

    def _get_or_404(self, internship_id: str) -> dict:
        internship = self.internships.get_by_id(internship_id)
        if not internship:
            raise NotFoundError("Internship not found")
        return internship

    # ---------- browsing ----------

    def list_internships(self, location: Optional[str] = None, skills: Optional[str] = None) -> List[dict]:
        query = build_catalog_query(location, skills)
        return self._with_company(self.internships.find(query))

    def get_internship(self, internship_id: str) -> dict:
        internship = self._get_or_404(internship_id)
        return self._with_company([internship])[0]

    def list_for_employer(self, actor: Actor) -> List[dict]:
        enforce(require_role(actor, Role.employer), actor)
        return self._with_company(self.internships.list_by_company(actor.user_id), {"name": 1})

    # ---------- employer writes ----------

    def create_internship(self, actor: Actor, data: InternshipCreate) -> dict:
        enforce(require_role(actor, Role.employer), actor)
        internship = self.internships.insert(actor.user_id, data.model_dump())
        logger.info("Employer %s posted internship %s", actor.user_id, internship["_id"])
        return internship

    def update_internship(self, actor: Actor, internship_id: str, data: InternshipUpdate) -> dict:
        enforce(require_role(actor, Role.employer), actor)
        internship = self._get_or_404(internship_id)
        enforce(can_manage_internship(actor, internship), actor)

        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        if not fields:
            return internship
        updated = self.internships.update(internship_id, fields)
        if not updated:
            # Deleted between the ownership check and the write
            raise NotFoundError("Internship not found")
        return updated

    def delete_internship(self, actor: Actor, internship_id: str) -> None:
        enforce(require_role(actor, Role.employer), actor)
        internship = self._get_or_404(internship_id)
        enforce(can_manage_internship(actor, internship), actor)
        if not self.internships.delete(internship_id):
            raise NotFoundError("Internship not found")
        logger.info("Employer %s deleted internship %s", actor.user_id, internship_id)

    # ---------- candidate bookmarks ----------

    def save_internship(self, actor: Actor, internship_id: str) -> dict:
        enforce(require_role(actor, Role.candidate), actor)
        self._get_or_404(internship_id)
        return self.saved.insert(actor.user_id, internship_id)

    def unsave_internship(self, actor: Actor, internship_id: str) -> None:
        enforce(require_role(actor, Role.candidate), actor)
        if not self.saved.delete(actor.user_id, internship_id):
            raise NotFoundError("Saved internship not found")

    def list_saved(self, actor: Actor) -> List[dict]:
        """Saved internships, skipping bookmarks whose internship was deleted."""
        enforce(require_role(actor, Role.candidate), actor)
        bookmarks = populate(
            self.saved.list_by_user(actor.user_id), "internship_id", self.internships.collection
        )
        internships = [b["internship_id"] for b in bookmarks if b.get("internship_id")]
        return self._with_company(internships)
