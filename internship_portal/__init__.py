"""
Internship Portal
Backend for an internship marketplace.

Architecture:
- MongoDB: all records (users, profiles, internships, applications, messages)
- Skill matcher: ranks internships for a candidate by required-skill overlap
- Access policy: role / ownership rules applied before every write
"""

__version__ = "1.0.0"
