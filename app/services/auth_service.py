# app/services/auth_service.py
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.user import UserModel
from app.domain.enums import Role
from app.domain.exceptions import (
    BadRequestException,
    ErrorCode,
    NotFoundException,
    UnauthorizedException,
)
from app.domain.schemas import SignUpIn, LoginIn
from app.repos.user_repo import UserRepo
from app.utils.settings import JWT_SECRET, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from app.utils.logging import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    return jwt.encode({"sub": str(user_id), "exp": expire}, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> int | None:
    """Zwraca id usera z tokenu albo None, gdy token jest zly lub wygasl."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None

    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        return None
    return int(sub)


def is_admin(user: UserModel) -> bool:
    return user.role == Role.ADMIN.value


class AuthService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def sign_up(self, payload: SignUpIn, role: Role = Role.USER) -> UserModel:
        if self.repo.get_user_by_email(payload.email):
            raise BadRequestException("User already exists!", ErrorCode.USER_ALREADY_EXISTS)

        user = UserModel(
            name=payload.name,
            email=payload.email,
            password=hash_password(payload.password),
            role=role.value,
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            # rownolegla rejestracja na ten sam email
            self.repo.rollback()
            raise BadRequestException("User already exists!", ErrorCode.USER_ALREADY_EXISTS)

        logger.info(f"User {created.id} signed up")
        return created

    def log_in(self, payload: LoginIn) -> tuple[UserModel, str]:
        user = self.repo.get_user_by_email(payload.email)
        if not user:
            raise NotFoundException("User does not exist!", ErrorCode.USER_NOT_FOUND)

        if not verify_password(payload.password, user.password):
            raise BadRequestException("Incorrect password!", ErrorCode.INCORRECT_PASSWORD)

        logger.info(f"User {user.id} logged in")
        return user, create_access_token(user.id)

    def resolve_token(self, token: str | None) -> UserModel:
        """Weryfikacja tokenu i lookup usera - jedno przejscie, bez retry."""
        if not token:
            raise UnauthorizedException()

        user_id = decode_access_token(token)
        if user_id is None:
            raise UnauthorizedException()

        user = self.repo.get_user(user_id)
        if not user:
            raise UnauthorizedException()
        return user
