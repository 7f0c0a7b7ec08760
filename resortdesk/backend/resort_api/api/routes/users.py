import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session
from ...api import deps
from ...core import policy, security
from ...db.session import get_db
from ...db import models, schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=schemas.Envelope[list[schemas.User]])
def list_users(
    role: models.UserRole | None = None,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("users", policy.READ)),
):
    query = db.query(models.User)
    if role:
        query = query.filter(models.User.role == role)
    return {"data": query.order_by(models.User.username).all()}


@router.post("", response_model=schemas.Envelope[schemas.User], status_code=status.HTTP_201_CREATED)
def create_user(
    payload: schemas.UserCreate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("users", policy.WRITE)),
):
    username = payload.username.strip().lower()
    email = payload.email.strip().lower()
    duplicate = (
        db.query(models.User)
        .filter(or_(models.User.username == username, models.User.email == email))
        .first()
    )
    if duplicate:
        raise HTTPException(status_code=400, detail="User with this username or email already exists")
    user = models.User(
        **payload.model_dump(exclude={"password", "username", "email"}),
        username=username,
        email=email,
        password_hash=security.get_password_hash(payload.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return {"message": "User created successfully", "data": user}


@router.patch("/{user_id}", response_model=schemas.Envelope[schemas.User])
def update_user(
    user_id: int,
    payload: schemas.UserUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("users", policy.WRITE)),
):
    user = db.get(models.User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    changes = payload.model_dump(exclude_unset=True)
    password = changes.pop("password", None)
    if changes.get("email"):
        email = changes["email"].strip().lower()
        taken = (
            db.query(models.User)
            .filter(models.User.email == email, models.User.id != user.id)
            .first()
        )
        if taken:
            raise HTTPException(status_code=400, detail="User with this username or email already exists")
        changes["email"] = email
    for key, value in changes.items():
        if value is not None:
            setattr(user, key, value)
    if password:
        user.password_hash = security.get_password_hash(password)
    db.commit()
    db.refresh(user)
    return {"message": "User updated successfully", "data": user}


@router.get("/{user_id}", response_model=schemas.Envelope[schemas.User])
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("users", policy.READ)),
):
    user = db.get(models.User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"data": user}


@router.patch("/{user_id}/change-password", response_model=schemas.Envelope[None])
def change_password(
    user_id: int,
    payload: schemas.PasswordChange,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("users", policy.WRITE)),
):
    user = db.get(models.User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    user.password_hash = security.get_password_hash(payload.password)
    db.commit()
    logger.info("Password changed", extra={"user_id": user.id})
    return {"message": "Password changed successfully"}


@router.delete("/{user_id}", response_model=schemas.Envelope[None])
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current: models.User = Depends(deps.require_permission("users", policy.DELETE)),
):
    if user_id == current.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    user = db.get(models.User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
    return {"message": "User deleted successfully"}
