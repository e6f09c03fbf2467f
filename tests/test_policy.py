import pytest

from internship_portal.core.errors import AuthorizationError
from internship_portal.core.policy import (
    Actor,
    Decision,
    can_manage_internship,
    can_mark_read,
    can_message_on_application,
    can_moderate_application,
    enforce,
    require_role,
)
from internship_portal.schemas.schemas import Role

EMPLOYER = Actor(user_id="e1", role=Role.employer)
OTHER_EMPLOYER = Actor(user_id="e2", role=Role.employer)
CANDIDATE = Actor(user_id="c1", role=Role.candidate)
OTHER_CANDIDATE = Actor(user_id="c2", role=Role.candidate)

INTERNSHIP = {"_id": "i1", "company_id": "e1"}
APPLICATION = {"_id": "a1", "candidate_id": "c1", "internship_id": "i1"}


def test_role_gating():
    assert require_role(CANDIDATE, Role.candidate).allowed
    assert not require_role(CANDIDATE, Role.employer).allowed


def test_owner_can_manage_internship():
    assert can_manage_internship(EMPLOYER, INTERNSHIP).allowed


def test_other_employer_cannot_manage_internship():
    decision = can_manage_internship(OTHER_EMPLOYER, INTERNSHIP)
    assert not decision.allowed
    assert decision.reason


def test_candidate_cannot_manage_internship():
    assert not can_manage_internship(CANDIDATE, {"company_id": "c1"}).allowed


def test_ownership_accepts_expanded_company():
    internship = {"_id": "i1", "company_id": {"_id": "e1", "name": "Acme"}}
    assert can_manage_internship(EMPLOYER, internship).allowed


def test_moderation_needs_internship_owner():
    assert can_moderate_application(EMPLOYER, INTERNSHIP).allowed
    assert not can_moderate_application(OTHER_EMPLOYER, INTERNSHIP).allowed


def test_messaging_parties():
    assert can_message_on_application(CANDIDATE, APPLICATION, INTERNSHIP).allowed
    assert can_message_on_application(EMPLOYER, APPLICATION, INTERNSHIP).allowed
    assert not can_message_on_application(OTHER_CANDIDATE, APPLICATION, INTERNSHIP).allowed
    assert not can_message_on_application(OTHER_EMPLOYER, APPLICATION, INTERNSHIP).allowed


def test_only_receiver_marks_read():
    message = {"_id": "m1", "sender_id": "c1", "receiver_id": "e1"}
    assert can_mark_read(EMPLOYER, message).allowed
    assert not can_mark_read(CANDIDATE, message).allowed


def test_enforce_raises_on_deny():
    enforce(Decision.allow())
    with pytest.raises(AuthorizationError):
        enforce(Decision.deny("nope"), CANDIDATE)
