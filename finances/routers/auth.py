# finances/routers/auth.py
# Session-cookie auth: register / login / logout. JSON in, JSON out.

from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from finances.db import get_session
from finances.schemas import LoginIn, RegisterIn, UserOut
from finances.services.users import UserService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_user_service(session: Session = Depends(get_session)) -> UserService:
    return UserService(session)


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(data: RegisterIn, users: UserService = Depends(get_user_service)):
    return users.register(data)


@router.post("/login")
def login(
    data: LoginIn,
    request: Request,
    users: UserService = Depends(get_user_service),
):
    user = users.authenticate(data.email, data.password)
    request.session["user_id"] = user.id
    return {"message": "Signed in.", "user": UserOut.model_validate(user)}


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"message": "Signed out."}
