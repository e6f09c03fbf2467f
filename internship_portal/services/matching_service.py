"""
Skill Matching & Recommendation Service

PURPOSE:
Score how well a candidate's skills cover an internship's required skills,
then rank the internship catalog for that candidate.

HOW IT WORKS:
1. Load the candidate's profile skills (none -> empty set)
2. Score every internship: share of required skills the candidate has
3. Sort by score, highest first

Matching is exact and case-sensitive: "Python" does not match "python".
"""

import logging
import math
from typing import Iterable, List, Optional, Tuple

from pymongo.database import Database

from internship_portal.core.policy import Actor, enforce, require_role
from internship_portal.schemas.schemas import Role
from internship_portal.services.mongo_service import (
    CandidateProfileStore,
    InternshipStore,
    UserStore,
    populate,
)

logger = logging.getLogger(__name__)

# Company fields shown on internship cards
COMPANY_CARD_FIELDS = {"name": 1, "profileImage": 1}


# ============================================================
# SKILL MATCHER
# ============================================================

def round_half_up(value: float) -> int:
    """2.5 -> 3, 66.67 -> 67 (Python's round() would send 2.5 to 2)."""
    return int(math.floor(value + 0.5))


def calculate_match_score(
    candidate_skills: Optional[Iterable[str]],
    required_skills: Optional[List[str]]
) -> int:
    """
    Percentage of required skills the candidate has, 0-100.

    Returns 0 when the candidate has no skills, and 0 when the internship
    lists no required skills (nothing to match against).
    """
    skills = set(candidate_skills or [])
    if not skills:
        return 0

    required = list(required_skills or [])
    if not required:
        return 0

    matched = sum(1 for skill in required if skill in skills)
    return round_half_up(100 * matched / len(required))


# ============================================================
# RECOMMENDATION RANKER
# ============================================================

def rank_internships(
    candidate_skills: Optional[Iterable[str]],
    internships: List[dict]
) -> List[Tuple[dict, int]]:
    """
    Pair each internship with its match score, best first.

    sorted() is stable, so equal scores keep catalog order.
    """
    skills = list(candidate_skills or [])
    scored = [
        (internship, calculate_match_score(skills, internship.get("required_skills")))
        for internship in internships
    ]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)


class RecommendationService:
    """
    Builds a candidate's internship feed.

    Process:
    1. Get candidate profile skills
    2. Get the full internship catalog (company expanded)
    3. Score and sort
    """

    def __init__(self, db: Database):
        self.profiles = CandidateProfileStore(db)
        self.internships = InternshipStore(db)
        self.users = UserStore(db)

    def recommend(self, actor: Actor) -> List[dict]:
        """Internships for the candidate, each with a matchScore, best first."""
        enforce(require_role(actor, Role.candidate), actor)

        profile = self.profiles.get_by_user(actor.user_id)
        skills = profile.get("skills", []) if profile else []

        catalog = self.internships.find()
        ranked = rank_internships(skills, catalog)
        populate([i for i, _ in ranked], "company_id", self.users.collection, COMPANY_CARD_FIELDS)

        logger.debug(
            "Ranked %d internships for %s (%d skills)",
            len(ranked), actor.user_id, len(skills)
        )
        return [{**internship, "matchScore": score} for internship, score in ranked]
