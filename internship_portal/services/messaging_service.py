"""
Messaging Relay

Messages always belong to an application. The sender is whoever calls,
the receiver is the other party:
- candidate of the application  -> internship's employer
- employer owning the internship -> the candidate
Anyone else is refused and nothing is stored.
"""

import logging
from typing import List, Tuple

from pymongo.database import Database

from internship_portal.core.errors import NotFoundError
from internship_portal.core.policy import (
    Actor,
    can_mark_read,
    can_message_on_application,
    can_view_applicant,
    enforce,
    ref_id,
    require_role,
)
from internship_portal.schemas.schemas import Role
from internship_portal.services.mongo_service import (
    ApplicationStore,
    CandidateProfileStore,
    InternshipStore,
    MessageStore,
    UserStore,
    populate,
)

logger = logging.getLogger(__name__)

EMPTY_CANDIDATE_PROFILE = {"skills": [], "education": "", "experience": "", "resume_url": ""}


def resolve_parties(actor: Actor, application: dict, internship: dict) -> Tuple[str, str]:
    """(sender_id, receiver_id) for a message the actor writes on application."""
    enforce(can_message_on_application(actor, application, internship), actor)
    if actor.role == Role.candidate:
        return actor.user_id, ref_id(internship["company_id"])
    return actor.user_id, ref_id(application["candidate_id"])


class MessagingService:

    def __init__(self, db: Database):
        self.messages = MessageStore(db)
        self.applications = ApplicationStore(db)
        self.internships = InternshipStore(db)
        self.users = UserStore(db)
        self.profiles = CandidateProfileStore(db)

    def _application_and_internship(self, application_id: str) -> Tuple[dict, dict]:
        application = self.applications.get_by_id(application_id)
        if not application:
            raise NotFoundError("Application not found")
        internship = self.internships.get_by_id(application["internship_id"])
        if not internship:
            raise NotFoundError("Internship not found")
        return application, internship

    def send(self, actor: Actor, application_id: str, body: str) -> dict:
        application, internship = self._application_and_internship(application_id)
        sender_id, receiver_id = resolve_parties(actor, application, internship)
        message = self.messages.insert(sender_id, receiver_id, application["_id"], body)
        logger.info("Message %s on application %s", message["_id"], application["_id"])
        return message

    def _inbox(self, actor: Actor) -> List[dict]:
        messages = self.messages.list_for_user(actor.user_id)
        populate(messages, "sender_id", self.users.collection, {"name": 1})
        populate(messages, "receiver_id", self.users.collection, {"name": 1})
        return populate(messages, "application_id", self.applications.collection)

    def list_for_candidate(self, actor: Actor) -> List[dict]:
        enforce(require_role(actor, Role.candidate), actor)
        messages = self._inbox(actor)
        applications = [m["application_id"] for m in messages if m.get("application_id")]
        populate(applications, "internship_id", self.internships.collection, {"title": 1})
        return messages

    def list_for_employer(self, actor: Actor) -> List[dict]:
        enforce(require_role(actor, Role.employer), actor)
        messages = self._inbox(actor)
        applications = [m["application_id"] for m in messages if m.get("application_id")]
        populate(applications, "candidate_id", self.users.collection, {"name": 1, "email": 1})
        populate(applications, "internship_id", self.internships.collection, {"title": 1})
        return messages

    def candidate_profile_for_application(self, actor: Actor, application_id: str) -> dict:
        """The applicant's account and profile, for the employer reviewing them."""
        enforce(require_role(actor, Role.employer), actor)
        application, internship = self._application_and_internship(application_id)
        enforce(can_view_applicant(actor, internship), actor)

        candidate_id = application["candidate_id"]
        profile = self.profiles.get_by_user(candidate_id)
        return {
            "user": self.users.get_by_id(candidate_id),
            "profile": profile or dict(EMPTY_CANDIDATE_PROFILE),
        }

    def mark_read(self, actor: Actor, message_id: str) -> dict:
        """Receiver only. Marking an already read message is a no-op."""
        message = self.messages.get_by_id(message_id)
        if not message:
            raise NotFoundError("Message not found")
        enforce(can_mark_read(actor, message), actor)
        if message.get("is_read"):
            return message
        return self.messages.mark_read(message_id) or message
