# ============================================================================
# FILE: app/services/user_service.py
# ============================================================================
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.db.models.user import User
from app.schemas.user import UserCreate
from app.core.security import get_password_hash, verify_password
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service layer for user operations"""

    def create_user(self, db: Session, user_data: UserCreate) -> User:
        """
        Create a new user account
        Raises 400 when the username or email is already taken
        """
        username = user_data.username.strip()
        email = user_data.email.lower()

        if self.get_user_by_username(db, username):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already registered"
            )
        if self.get_user_by_email(db, email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered"
            )

        try:
            user = User(
                username=username,
                email=email,
                hashed_password=get_password_hash(user_data.password),
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.username}")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email.lower()).first()

    def authenticate_user(self, db: Session, username: str, password: str) -> Optional[User]:
        """Authenticate user with username and password"""
        user = self.get_user_by_username(db, username)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def request_password_reset(self, db: Session, email: str) -> str:
        """
        Acknowledge a password recovery request
        No mail is sent; the answer is identical for unknown addresses so the
        endpoint cannot be used to probe which emails are registered
        """
        if self.get_user_by_email(db, email):
            logger.info(f"Password recovery requested for user with email {email}")
        else:
            logger.info("Password recovery requested for unknown email")
        return "If this email is registered, recovery instructions will be sent."

# Create singleton instance
user_service = UserService()
