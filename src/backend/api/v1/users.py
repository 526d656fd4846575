"""
User registration and lookup.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_ledger, get_store
from core.exceptions import DuplicateUserError
from repositories.entity_store import EntityStore
from schemas.converters import user_to_schema
from schemas.user import UserCreate, UserResponse
from services.engagement_service import EngagementLedger

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserCreate,
    ledger: EngagementLedger = Depends(get_ledger),
) -> UserResponse:
    """Register an account. Usernames are unique regardless of case."""
    try:
        user = await ledger.register_user(
            username=user_data.username,
            password=user_data.password,
            email=str(user_data.email),
        )
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None
    return user_to_schema(user)


@router.get("/{username}", response_model=UserResponse)
async def get_user_by_username(
    username: str,
    store: EntityStore = Depends(get_store),
) -> UserResponse:
    user = store.get_user_by_username(username)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user_to_schema(user)
