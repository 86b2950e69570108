# backend/app/api/user_routes.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps_auth import CurrentUser, get_current_user, get_db, require_roles
from app.api.schemas import UserListResponse, UserOut, UserResponse
from app.services import users as user_store

router = APIRouter()


# any authenticated role
@router.get("/me", response_model=UserResponse)
def me(current_user: CurrentUser = Depends(get_current_user)):
    return UserResponse(
        message="User profile fetched successfully",
        user=UserOut.model_validate(current_user),
    )


@router.get("", response_model=UserListResponse)
def list_users(
    db: Session = Depends(get_db),
    _admin: CurrentUser = Depends(require_roles("admin")),
):
    users = [UserOut.model_validate(u) for u in user_store.list_all(db)]
    return UserListResponse(
        message="Users fetched successfully",
        count=len(users),
        users=users,
    )
