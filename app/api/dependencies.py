# ============================================================================
# FILE: app/api/dependencies.py
# ============================================================================
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.core.security import decode_access_token
from app.db.models.user import User
from app.services.user_service import user_service

# Missing bearer header is answered with 401 by the scheme itself
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/user/login")

def require_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the account named by the bearer token
    Every library, playlist and home route depends on this
    """
    payload = decode_access_token(token)
    user = user_service.get_user_by_username(db, payload.get("sub") or "")
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
