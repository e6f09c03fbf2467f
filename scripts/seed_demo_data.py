#!/usr/bin/env python3
"""
Demo Data Script

Creates one employer with a few internships and one candidate with a
profile, then prints the candidate's recommended internships.
Re-running is safe: existing demo users are reused.

PREREQUISITES:
- MongoDB running (see scripts/check_connection.py)

Run: python scripts/seed_demo_data.py
"""
import sys
sys.path.insert(0, '.')

from internship_portal.core.auth import hash_password
from internship_portal.core.config import get_settings
from internship_portal.core.policy import Actor
from internship_portal.db.mongodb import create_mongo_client, get_mongo_db, init_mongo_indexes
from internship_portal.schemas.schemas import Role
from internship_portal.services.matching_service import RecommendationService
from internship_portal.services.mongo_service import get_stores

DEMO_PASSWORD = "demo-password"

DEMO_INTERNSHIPS = [
    {"title": "Data Engineering Intern", "required_skills": ["Python", "SQL", "Airflow"], "location": "Remote"},
    {"title": "Backend Intern", "required_skills": ["Python", "FastAPI"], "location": "Berlin"},
    {"title": "iOS Intern", "required_skills": ["Swift"], "location": "Remote"},
]


def get_or_create_user(stores, name, email, role):
    user = stores["users"].get_by_email(email)
    if user:
        print(f"    ⚠️  {email} already exists, reusing")
        user.pop("password", None)
        return user
    user = stores["users"].insert(name, email, hash_password(DEMO_PASSWORD), role.value)
    print(f"    ✅ Created {role.value} {email}")
    return user


def main():
    settings = get_settings()
    client = create_mongo_client(settings)
    db = get_mongo_db(client, settings)
    init_mongo_indexes(db)
    stores = get_stores(db)

    print("\n[1] Users...")
    employer = get_or_create_user(stores, "Demo Employer", "employer@demo.io", Role.employer)
    candidate = get_or_create_user(stores, "Demo Candidate", "candidate@demo.io", Role.candidate)

    print("\n[2] Internships...")
    if stores["internships"].list_by_company(employer["_id"]):
        print("    ⚠️  Demo internships already exist, skipping creation")
    else:
        for posting in DEMO_INTERNSHIPS:
            stores["internships"].insert(employer["_id"], {
                **posting,
                "description": f"{posting['title']} at Demo Employer",
                "stipend": "1000",
                "duration": "3 months",
                "applicationDeadline": None,
            })
            print(f"    ✅ {posting['title']}")

    print("\n[3] Candidate profile...")
    stores["candidate_profiles"].upsert(candidate["_id"], {
        "skills": ["Python", "SQL"],
        "education": "BSc Computer Science",
    })
    print("    ✅ Skills: Python, SQL")

    print("\n[4] Recommendations...")
    actor = Actor(user_id=candidate["_id"], role=Role.candidate)
    for internship in RecommendationService(db).recommend(actor):
        print(f"    {internship['matchScore']:>3}%  {internship['title']}")

    client.close()
    print(f"\nLogin with either demo email and password '{DEMO_PASSWORD}'.")


if __name__ == "__main__":
    main()
