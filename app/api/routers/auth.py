from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.data.database import get_db
from app.data.models.user import UserModel
from app.domain.schemas import SignUpIn, LoginIn, LoginOut, UserRead
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserRead, status_code=201)
def sign_up(payload: SignUpIn, db: Session = Depends(get_db)):
    return AuthService(db).sign_up(payload)


@router.post("/login", response_model=LoginOut)
def log_in(payload: LoginIn, db: Session = Depends(get_db)):
    user, token = AuthService(db).log_in(payload)
    return {"user": user, "token": token}


@router.get("/current-user", response_model=UserRead)
def current_user(user: UserModel = Depends(get_current_user)):
    return user
