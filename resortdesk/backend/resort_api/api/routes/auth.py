from datetime import datetime, timedelta, timezone
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from ...core import security
from ...db.session import get_db
from ...db import models, schemas
from ...config import get_settings
from .. import deps

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class TokenResponse(BaseModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    user: schemas.User


@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    username = form_data.username.strip().lower()
    user = db.query(models.User).filter_by(username=username).first()
    if not user or not security.verify_password(form_data.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User account is disabled")
    settings = get_settings()
    token = security.create_access_token(
        {"sub": str(user.id), "role": user.role.value},
        timedelta(minutes=settings.jwt_expire_min),
    )
    try:
        user.last_login_at = datetime.now(timezone.utc)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Could not record last login", extra={"user_id": user.id}, exc_info=True)
    return TokenResponse(access_token=token, user=schemas.User.model_validate(user))


@router.get("/me", response_model=schemas.Envelope[schemas.User])
def me(current: models.User = Depends(deps.get_current_user)):
    return {"data": current}


@router.post("/logout", response_model=schemas.Envelope[None])
def logout(current: models.User = Depends(deps.get_current_user)):
    logger.info("User logged out", extra={"user_id": current.id})
    return {"message": "Logged out successfully"}
