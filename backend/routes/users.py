# backend/routes/users.py
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from typing import Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from models.users import User, UserLevel
from schemas.user import UserCreate, UserUpdate, UserResponse, UserPage
from utils.audit import write_log, client_ip
from utils.hashing import get_password_hash
from utils.updates import changed_fields, apply_changes

router = APIRouter(prefix="/users", tags=["Users"])


def _get_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _username_taken(db: Session, username: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(User).filter(func.lower(User.username) == username.lower())
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


# Retrieve a list of staff accounts with filtering, sorting, and pagination
@router.get("", response_model=UserPage)
def list_users(
    q: Optional[str] = Query(None, description="Search by username or full name"),
    level: Optional[UserLevel] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    query = db.query(User)

    if q:
        like = f"%{q}%"
        query = query.filter(User.username.ilike(like) | User.full_name.ilike(like))
    if level:
        query = query.filter(User.level == level)

    query = query.order_by(User.username.asc())
    total = query.count()
    users = query.offset((page - 1) * page_size).limit(page_size).all()

    return {"items": users, "total": total, "page": page, "page_size": page_size}


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, request: Request, db: Session = Depends(get_db)):
    username = payload.username.strip()
    if _username_taken(db, username):
        write_log(db, action="USER_CREATE", resource="users", status="FAIL", ip=client_ip(request),
                  meta={"username": username, "reason": "Username exists"})
        raise HTTPException(status_code=409, detail="Username already exists")

    user = User(
        username=username,
        password_hash=get_password_hash(payload.password),
        full_name=payload.full_name,
        level=payload.level,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    write_log(db, user_id=user.id, action="USER_CREATE", resource="users", ip=client_ip(request),
              meta={"username": user.username})
    return user


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, payload: UserUpdate, request: Request, db: Session = Depends(get_db)):
    changes = changed_fields(payload, required=("username", "password", "level"))
    user = _get_or_404(db, user_id)

    if "username" in changes:
        changes["username"] = changes["username"].strip()
        if _username_taken(db, changes["username"], exclude_id=user.id):
            raise HTTPException(status_code=409, detail="Username already exists")
    if "password" in changes:
        changes["password_hash"] = get_password_hash(changes.pop("password"))

    apply_changes(user, changes)
    db.commit()
    db.refresh(user)

    # Field names only, never the password hash
    write_log(db, user_id=user.id, action="USER_UPDATE", resource="users", ip=client_ip(request),
              meta={"fields": sorted(k for k in changes if k != "password_hash")})
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, request: Request, db: Session = Depends(get_db)):
    user = _get_or_404(db, user_id)
    db.delete(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="User is referenced by sales or purchases")

    write_log(db, action="USER_DELETE", resource="users", ip=client_ip(request), meta={"id": user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
