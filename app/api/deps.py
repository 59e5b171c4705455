# app/api/deps.py
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.data.models.user import UserModel
from app.domain.exceptions import ForbiddenException
from app.services.auth_service import AuthService, is_admin
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService
from app.services.order_service import OrderService

# auto_error=False - brak naglowka obslugujemy sami (401 w naszym formacie)
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> UserModel:
    token = credentials.credentials if credentials else None
    return AuthService(db).resolve_token(token)


def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    if not is_admin(user):
        raise ForbiddenException("Admin role required")
    return user


def get_lock_service(request: Request) -> LockService:
    return request.app.state.lock_service


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_order_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(
        db=db,
        lock_service=lock_service,
        notification_service=notification_service,
    )
