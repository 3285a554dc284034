"""
Authentication API endpoints.
Handles self-registration and sign-in.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.user import SignInRequest, SignUpRequest, TokenResponse
from app.services.users import UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/sign-up", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    request: SignUpRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user with the USER role and return an access token.
    """
    token = UserService(db).sign_up(request.username, request.email, request.password)
    return TokenResponse(access_token=token)


@router.post("/sign-in", response_model=TokenResponse)
def sign_in(
    request: SignInRequest,
    db: Session = Depends(get_db)
):
    """
    Exchange username and password for an access token.
    """
    token = UserService(db).sign_in(request.username, request.password)
    return TokenResponse(access_token=token)
