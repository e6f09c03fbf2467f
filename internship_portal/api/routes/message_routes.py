"""
Message Routes

POST /messages - Send a message on an application (its candidate or employer)
GET /messages/candidate - My messages (candidate only)
GET /messages/employer - My messages (employer only)
GET /messages/candidate-profile/{application_id} - Applicant profile (owning employer)
PUT /messages/{message_id}/read - Mark as read (receiver only)
"""

from fastapi import APIRouter, Depends
from pymongo.database import Database
from typing import List

from internship_portal.core.auth import get_current_user, require_candidate, require_employer
from internship_portal.core.policy import Actor
from internship_portal.db.mongodb import get_db
from internship_portal.services.messaging_service import MessagingService
from internship_portal.schemas.schemas import (
    MessageCreate, ConversationMessageResponse, ApplicantProfileResponse
)

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post("", response_model=ConversationMessageResponse, status_code=201)
async def send_message(
    request: MessageCreate,
    actor: Actor = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """Send a message. The receiver is the other party of the application."""
    return MessagingService(db).send(actor, request.application_id, request.message)


@router.get("/candidate", response_model=List[ConversationMessageResponse])
async def candidate_messages(
    candidate: Actor = Depends(require_candidate),
    db: Database = Depends(get_db)
):
    """Messages sent or received by the current candidate, newest first."""
    return MessagingService(db).list_for_candidate(candidate)


@router.get("/employer", response_model=List[ConversationMessageResponse])
async def employer_messages(
    employer: Actor = Depends(require_employer),
    db: Database = Depends(get_db)
):
    """Messages sent or received by the current employer, newest first."""
    return MessagingService(db).list_for_employer(employer)


@router.get("/candidate-profile/{application_id}", response_model=ApplicantProfileResponse)
async def applicant_profile(
    application_id: str,
    employer: Actor = Depends(require_employer),
    db: Database = Depends(get_db)
):
    """Candidate account and profile behind an application to one of your internships."""
    return MessagingService(db).candidate_profile_for_application(employer, application_id)


@router.put("/{message_id}/read", response_model=ConversationMessageResponse)
async def mark_message_read(
    message_id: str,
    actor: Actor = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """Mark a message as read."""
    return MessagingService(db).mark_read(actor, message_id)
