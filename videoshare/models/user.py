"""
User model for authentication
"""

from dataclasses import dataclass


@dataclass
class User:
    id: int
    username: str
    # Stored as supplied; credentials are not hashed in this service
    password: str
    is_admin: bool = False
