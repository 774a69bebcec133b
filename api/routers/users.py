"""User API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError
from api.dependencies import get_db
from api.errors import database_http_error
from api.schemas import CreateUserRequest
from models import User

router = APIRouter()


@router.post("", response_model=User, status_code=201)
async def create_user(req: CreateUserRequest, db: DatabaseManager = Depends(get_db)):
    """Register the signed-in identity on first login."""
    try:
        return await db.users.create_user(User(auth_uid=req.auth_uid, email=req.email))
    except DatabaseError as e:
        raise database_http_error(e)


@router.get("/by-auth/{auth_uid}", response_model=User)
async def get_user_by_auth_uid(auth_uid: str, db: DatabaseManager = Depends(get_db)):
    user = await db.users.get_user_by_auth_uid(auth_uid)
    if not user:
        raise HTTPException(404, "User not found")
    return user


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, db: DatabaseManager = Depends(get_db)):
    user = await db.users.get_user(user_id)
    if not user:
        raise HTTPException(404, "User not found")
    return user
