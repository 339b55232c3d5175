"""Sign-in and sign-out for provisioned profiles."""
import logging
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from gift_registry.database import get_db
from gift_registry.deps import get_bearer_token
from gift_registry.errors import AuthenticationError
from gift_registry.schemas.profile import TokenOut
from gift_registry.services import identity_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/token", response_model=TokenOut)
def sign_in(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """OAuth2 password flow. ``username`` may be the user id or the email."""
    token, expires_at = identity_service.sign_in(db, form_data.username, form_data.password)
    logger.info("Profile %s signed in", form_data.username)
    return TokenOut(access_token=token, expires_at=expires_at)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)):
    if not token:
        raise AuthenticationError()
    identity_service.sign_out(db, token)
