# finances/routers/users.py
# The signed-in user's own profile. There is no way to target another user.

from fastapi import APIRouter, Depends, Request

from finances.routers.auth import get_user_service
from finances.schemas import UserOut, UserPatch
from finances.security import require_user_id
from finances.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserOut)
def get_profile(
    user_id: int = Depends(require_user_id),
    users: UserService = Depends(get_user_service),
):
    return users.get_profile(user_id)


@router.patch("/me", response_model=UserOut)
def update_profile(
    patch: UserPatch,
    user_id: int = Depends(require_user_id),
    users: UserService = Depends(get_user_service),
):
    return users.update_profile(user_id, patch)


@router.delete("/me")
def delete_account(
    request: Request,
    user_id: int = Depends(require_user_id),
    users: UserService = Depends(get_user_service),
):
    deleted_reports = users.delete_user_cascade(user_id)
    request.session.clear()
    return {
        "message": "User and related reports deleted.",
        "deleted_reports": deleted_reports,
    }
