"""
User model for authentication and job applications.
"""

from sqlalchemy import Column, String, Text, Boolean, false
from app.core.database import Base


class User(Base):
    """
    User account, keyed by username.

    `password` holds the bcrypt hash, never the plain text.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
