"""
Create an account (e.g. the first Admin) without going through HTTP. Run from project root:
  python -m gatekeeper.scripts.create_user FULLNAME EMAIL PASSWORD [role]
Example:
  python -m gatekeeper.scripts.create_user "Ada Admin" ada@acme.io your-secure-password Admin
"""
import argparse
import logging
import sys

from gatekeeper.core.config import get_settings
from gatekeeper.core.database import SessionLocal, create_tables
from gatekeeper.core.security import PasswordHasher, TokenService
from gatekeeper.models.user import Role
from gatekeeper.serve import configure_logging
from gatekeeper.services.auth import AuthService, ValidationFailed
from gatekeeper.services.user_store import DuplicateEmail, StorageError, UserStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Gatekeeper account.")
    parser.add_argument("fullname", help="Display name")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (at least 6 characters)")
    parser.add_argument("role", nargs="?", default=Role.REGULAR.value, choices=Role.values())
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    if settings.DB_AUTO_CREATE:
        create_tables()

    db = SessionLocal()
    try:
        auth = AuthService(
            UserStore(db),
            PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
            TokenService.from_settings(settings),
        )
        user_id = auth.signup(args.fullname, args.email, args.password, args.role)
    except ValidationFailed as e:
        for err in e.errors:
            print(f"{err.field}: {err.message}", file=sys.stderr)
        return 1
    except DuplicateEmail:
        print(f"Account '{args.email}' already exists.", file=sys.stderr)
        return 1
    except StorageError as e:
        logger.error("Could not create account: %s (%s)", e.message, type(e.cause).__name__)
        return 1
    finally:
        db.close()
    print(f"Created account {user_id} '{args.email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
