# app/data/seed.py
from app.data.database import Database
from app.domain.enums import Role
from app.domain.schemas import SignUpIn
from app.repos.user_repo import UserRepo
from app.services.auth_service import AuthService
from app.utils.settings import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD
from app.utils.logging import get_logger

logger = get_logger(__name__)


def seed(database: Database):
    """Zaklada konto admina z ustawien; ponowne uruchomienie nic nie zmienia."""
    db = database.session()
    try:
        # not forcing: only seed if missing
        if UserRepo(db).get_user_by_email(ADMIN_EMAIL):
            return None
        admin = AuthService(db).sign_up(
            SignUpIn(name=ADMIN_NAME, email=ADMIN_EMAIL, password=ADMIN_PASSWORD),
            role=Role.ADMIN,
        )
        logger.info(f"Seeded admin user {admin.id}")
        return admin.id
    finally:
        db.close()


if __name__ == "__main__":
    database = Database()
    database.create_all()
    seed(database)
