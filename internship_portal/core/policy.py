"""
Access Control Policy

Pure rules of the form (actor, resource...) -> Decision. Nothing here touches
the database or FastAPI, so every rule can be tested on plain dicts.
Services call enforce() on the decision, which raises AuthorizationError
for a Deny.

Resources are serialized documents: ids are strings, and a reference may
already be expanded into a dict (see ref_id).
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from internship_portal.core.errors import AuthorizationError
from internship_portal.schemas.schemas import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, as resolved by the auth layer."""
    user_id: str
    role: Role


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str = "Access denied") -> "Decision":
        return cls(False, reason)


def ref_id(value: Any) -> Optional[str]:
    """Id of a reference that may be a raw id or an expanded document."""
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("_id")
    return str(value) if value is not None else None


def enforce(decision: Decision, actor: Optional[Actor] = None) -> None:
    """Raise AuthorizationError unless the decision allows."""
    if decision.allowed:
        return
    if actor is not None:
        logger.info("Denied %s %s: %s", actor.role.value, actor.user_id, decision.reason)
    raise AuthorizationError(decision.reason)


# ============================================================
# ROLE GATING
# ============================================================

def require_role(actor: Actor, role: Role) -> Decision:
    if actor.role != role:
        return Decision.deny(f"Access denied: {role.value}s only")
    return Decision.allow()


# ============================================================
# OWNERSHIP GATING
# ============================================================

def owns_internship(actor: Actor, internship: dict) -> bool:
    return actor.role == Role.employer and ref_id(internship.get("company_id")) == actor.user_id


def can_manage_internship(actor: Actor, internship: dict) -> Decision:
    """Edit/delete an internship: the posting employer only."""
    decision = require_role(actor, Role.employer)
    if not decision.allowed:
        return decision
    if not owns_internship(actor, internship):
        return Decision.deny("Access denied: not your internship")
    return Decision.allow()


def can_moderate_application(actor: Actor, internship: dict) -> Decision:
    """Change an application's status: owner of the internship it targets."""
    decision = require_role(actor, Role.employer)
    if not decision.allowed:
        return decision
    if not owns_internship(actor, internship):
        return Decision.deny("Access denied: application is not for your internship")
    return Decision.allow()


def can_view_applicant(actor: Actor, internship: dict) -> Decision:
    """Read a candidate's profile through their application."""
    return can_moderate_application(actor, internship)


# ============================================================
# MESSAGING
# ============================================================

def can_message_on_application(actor: Actor, application: dict, internship: dict) -> Decision:
    """Only the two parties of an application may write on it."""
    if actor.role == Role.candidate:
        if ref_id(application.get("candidate_id")) == actor.user_id:
            return Decision.allow()
        return Decision.deny("Access denied: not your application")
    if actor.role == Role.employer:
        if owns_internship(actor, internship):
            return Decision.allow()
        return Decision.deny("Access denied: not your internship")
    return Decision.deny()


def can_mark_read(actor: Actor, message: dict) -> Decision:
    if ref_id(message.get("receiver_id")) != actor.user_id:
        return Decision.deny("Access denied: only the receiver can mark a message read")
    return Decision.allow()
