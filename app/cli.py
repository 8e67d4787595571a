import argparse
import getpass
import sys

from pydantic import ValidationError

from database.init import Base, SessionLocal, engine
from enums.role import Role
from schemas.auth_schema import UserCreate
from services.auth_service import create_user
from utils.exceptions import ServiceError


def create_admin(name: str, email: str, password: str, phone: str = None):
    """Create an ADMIN account; registration over HTTP never grants that role."""
    payload = UserCreate(name=name, email=email, password=password, phone=phone)
    db = SessionLocal()
    try:
        return create_user(payload, db, role=Role.ADMIN)
    finally:
        db.close()


def main(argv=None) -> int:
    p = argparse.ArgumentParser(prog="campus-rentals")
    sub = p.add_subparsers(dest="command", required=True)

    admin = sub.add_parser("create-admin", help="create an administrator account")
    admin.add_argument("--name", required=True)
    admin.add_argument("--email", required=True)
    admin.add_argument("--phone", default=None)
    admin.add_argument("--password", default=None, help="prompted for when omitted")

    sub.add_parser("init-db", help="create any missing tables")

    args = p.parse_args(argv)

    if args.command == "init-db":
        Base.metadata.create_all(bind=engine)
        print({"ok": True})
        return 0

    password = args.password or getpass.getpass("Password: ")
    try:
        user = create_admin(args.name, args.email, password, phone=args.phone)
    except ValidationError as e:
        print({"ok": False, "errors": [err["msg"] for err in e.errors()]}, file=sys.stderr)
        return 1
    except ServiceError as e:
        print({"ok": False, "error": e.message}, file=sys.stderr)
        return 1

    print({"ok": True, "id": user.id, "email": user.email, "role": user.role.value})
    return 0


if __name__ == "__main__":
    sys.exit(main())
