# assetverse/utils/auth.py
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from assetverse.config.settings import settings
from assetverse.database import get_db
from assetverse.errors import AuthError, Forbidden
from assetverse.models.user import User
from assetverse.repositories import UserRepository

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> dict:
    """Verify JWT token and return payload without raising exceptions"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        return None


def get_current_email(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> str:
    """The verified principal; every self-scoped write uses this, never a body field"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthError("Unauthorized access")

    payload = verify_token(credentials.credentials)
    if payload is None:
        raise AuthError("Invalid or expired token")

    email = payload.get("email") or payload.get("sub")
    if not email:
        raise AuthError("Invalid or expired token")
    return email


def get_current_user(email: str = Depends(get_current_email), db: Session = Depends(get_db)) -> User:
    user = UserRepository(db).by_email(email)
    if user is None:
        raise AuthError("Account is not registered")
    return user


def require_hr(user: User = Depends(get_current_user)) -> User:
    if user.role != "hr":
        raise Forbidden("HR access only")
    return user


def require_employee(user: User = Depends(get_current_user)) -> User:
    if user.role != "employee":
        raise Forbidden("Employee access only")
    return user
