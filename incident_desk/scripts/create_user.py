"""
Create a user (e.g. first admin). Seeds the role rows first. Run from project root:
  python -m incident_desk.scripts.create_user USERNAME EMAIL PASSWORD [role ...]
Example:
  python -m incident_desk.scripts.create_user admin admin@example.com your-password admin
"""
import argparse
import sys

from pydantic import ValidationError

from incident_desk.core.config import get_settings
from incident_desk.core.database import SessionLocal
from incident_desk.core.logging_config import configure_logging
from incident_desk.schemas.auth import RoleName, SignupRequest
from incident_desk.services.roles import seed_roles
from incident_desk.services.users import DuplicateUserError, register_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Incident Desk user.")
    parser.add_argument("username", help="Username (3-20 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-40 chars)")
    parser.add_argument(
        "roles",
        nargs="*",
        help=f"Roles to assign, any of {[r.value for r in RoleName]} (default: user)",
    )
    args = parser.parse_args(argv)
    configure_logging(get_settings().LOG_LEVEL)

    try:
        request = SignupRequest(
            username=args.username,
            email=args.email,
            password=args.password,
            roles=args.roles or None,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        seed_roles(db)
        user = register_user(
            db, request.username, request.email, request.password, request.roles
        )
    except DuplicateUserError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with roles {[r.name for r in user.roles]}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
