"""
Application Lifecycle Service

States: Pending (initial) -> Approved | Rejected.

- Candidates apply once per internship. The service checks for an existing
  application first; the unique index on (candidate_id, internship_id) is
  what actually holds under concurrent submissions.
- Employers set the status of applications to internships they own.
  Any status may overwrite any other; overwriting a decided application
  is logged, not blocked.
"""

import logging
from typing import List, Optional

from fastapi import UploadFile
from pymongo.database import Database

from internship_portal.core.errors import ConflictError, NotFoundError
from internship_portal.core.policy import Actor, can_moderate_application, enforce, require_role
from internship_portal.schemas.schemas import (
    ApplicationCreate,
    ApplicationStatus,
    Role,
    TERMINAL_STATUSES,
)
from internship_portal.services.mongo_service import (
    ApplicationStore,
    InternshipStore,
    UserStore,
    populate,
)
from internship_portal.utils.file_upload import BlobStorage

logger = logging.getLogger(__name__)


class ApplicationService:

    def __init__(self, db: Database, storage: Optional[BlobStorage] = None):
        self.applications = ApplicationStore(db)
        self.internships = InternshipStore(db)
        self.users = UserStore(db)
        self.storage = storage

    def list_for_candidate(self, actor: Actor) -> List[dict]:
        """Candidate's own applications, internship expanded."""
        enforce(require_role(actor, Role.candidate), actor)
        applications = self.applications.list_by_candidate(actor.user_id)
        return populate(applications, "internship_id", self.internships.collection)

    def list_for_employer(self, actor: Actor) -> List[dict]:
        """Applications to the employer's internships, candidate and title expanded."""
        enforce(require_role(actor, Role.employer), actor)
        internship_ids = [i["_id"] for i in self.internships.list_by_company(actor.user_id)]
        applications = self.applications.list_by_internships(internship_ids)
        populate(applications, "candidate_id", self.users.collection, {"name": 1, "email": 1})
        return populate(applications, "internship_id", self.internships.collection, {"title": 1})

    async def apply(
        self,
        actor: Actor,
        data: ApplicationCreate,
        resume: Optional[UploadFile] = None
    ) -> dict:
        """
        Create a Pending application.

        An uploaded resume file wins over a resume_url in the body.
        """
        enforce(require_role(actor, Role.candidate), actor)

        if not self.internships.get_by_id(data.internship_id):
            raise NotFoundError("Internship not found")

        if self.applications.find_for(actor.user_id, data.internship_id):
            raise ConflictError("You have already applied for this internship")

        resume_url = data.resume_url
        stored = False
        if resume is not None and resume.filename:
            resume_url = await self.storage.save_resume(resume, prefix="resume")
            stored = True

        try:
            application = self.applications.insert(
                candidate_id=actor.user_id,
                internship_id=data.internship_id,
                status=ApplicationStatus.pending.value,
                cover_letter=data.cover_letter,
                resume_url=resume_url,
                additional_info=data.additional_info
            )
        except ConflictError:
            # Lost the race to a concurrent submission
            if stored:
                self.storage.delete(resume_url)
            raise
        logger.info(
            "Candidate %s applied to internship %s", actor.user_id, data.internship_id
        )
        return application

    def update_status(self, actor: Actor, application_id: str, status: ApplicationStatus) -> dict:
        enforce(require_role(actor, Role.employer), actor)

        application = self.applications.get_by_id(application_id)
        if not application:
            raise NotFoundError("Application not found")

        internship = self.internships.get_by_id(application["internship_id"])
        if not internship:
            raise NotFoundError("Internship not found")
        enforce(can_moderate_application(actor, internship), actor)

        previous = ApplicationStatus(application["status"])
        if previous in TERMINAL_STATUSES and previous != status:
            logger.warning(
                "Application %s changed from decided status %s to %s",
                application_id, previous.value, status.value
            )

        updated = self.applications.set_status(application_id, status.value)
        if not updated:
            raise NotFoundError("Application not found")
        return updated
