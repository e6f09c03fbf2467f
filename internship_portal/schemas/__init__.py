"""
Schemas module - Request/Response schemas for API endpoints.
"""
from internship_portal.schemas.schemas import ApplicationStatus, Role

__all__ = ["ApplicationStatus", "Role"]
