"""
Create a user from the command line (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Site Admin" admin@example.com your-secure-password ADMIN
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.security import hash_password
from app.models import Role, User


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Todo API user.")
    parser.add_argument("name", help="Display name (at least 6 chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (at least 6 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[Role.USER.value, Role.ADMIN.value],
    )
    args = parser.parse_args(argv)

    name = args.name.strip()
    email = args.email.strip()
    password = args.password.strip()
    if len(name) < 6:
        print("Name must be at least 6 characters.", file=sys.stderr)
        return 1
    if len(email) < 6 or "@" not in email:
        print("Invalid email.", file=sys.stderr)
        return 1
    if len(password) < 6:
        print("Password must be at least 6 characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password, settings.BCRYPT_ROUNDS),
            role=args.role,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
