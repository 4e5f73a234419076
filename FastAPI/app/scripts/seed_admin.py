"""
Create or refresh the platform admin account from settings.
Usage: python -m app.scripts.seed_admin
Reads ADMIN_EMAIL / ADMIN_PASSWORD. An existing ADMIN with that email is
re-activated, marked verified and given the configured password. Roles never
change: if the email belongs to an applicant or employer the script exits non-zero.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from app.config import settings
from app.core.security import hash_password
from app.database import SessionLocal, ensure_tables_exist
from app.models.enums import UserRole
from app.repos.user_repo import create, get_by_email, normalize_email, update


class SeedAdminError(Exception):
    pass


def seed_admin(db, email: str, password: str):
    user = get_by_email(db, email)
    if user is None:
        return create(db, email=email, password=password, role=UserRole.ADMIN.value, is_email_verified=True), True
    if user.role != UserRole.ADMIN.value:
        raise SeedAdminError(f"{email} belongs to an {user.role} account")
    user = update(db, user.id, password_hash=hash_password(password), is_active=True, is_email_verified=True)
    return user, False


def main():
    email = normalize_email(settings.admin_email)
    ensure_tables_exist()
    db = SessionLocal()
    try:
        _, created = seed_admin(db, email, settings.admin_password)
        print(f"{'Created' if created else 'Updated'} admin account: {email}")
    except SeedAdminError as e:
        print(f"Refusing to seed admin: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
