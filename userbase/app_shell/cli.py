import argparse
import logging
import sys

from userbase.adapters.auth.crypto import PasslibPasswordHasher
from userbase.adapters.clock import SystemClock
from userbase.adapters.sqlite.migrator import SQLiteMigrator
from userbase.adapters.sqlite.repos import SQLiteUserRepo
from userbase.api.deps import Settings
from userbase.app_shell.config import validate_startup
from userbase.components.users import CreateUserInput, UserError, run_create_user
from userbase.domain.errors import ConfigurationError, StorageError
from userbase.rules.loader import load_rules
from userbase.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def get_rules(settings: Settings) -> Rules:
    try:
        return load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(1)


def handle_migrate(settings: Settings, args: argparse.Namespace) -> None:
    applied = SQLiteMigrator(settings.db_path).run_migrations()
    print(f"Applied {len(applied)} migration(s) to {settings.db_path}.")


def handle_create_user(settings: Settings, args: argparse.Namespace) -> None:
    rules = get_rules(settings)
    SQLiteMigrator(settings.db_path).run_migrations()
    inp = CreateUserInput(
        name=args.name, email=args.email, telephone=args.telephone, password=args.password
    )
    try:
        user = run_create_user(
            inp,
            user_repo=SQLiteUserRepo(settings.db_path),
            hasher=PasslibPasswordHasher.from_rules(rules.auth.password_hashing),
            time=SystemClock(),
        )
    except (UserError, StorageError) as e:
        logger.error("Could not create user %s: %s", args.email, e)
        sys.exit(1)
    print(f"Created user {user.id} <{user.email}>.")


def handle_serve(settings: Settings, args: argparse.Namespace) -> None:
    import uvicorn

    rules = get_rules(settings)
    try:
        validate_startup(settings, rules)
    except ConfigurationError as e:
        logger.critical("%s", e)
        sys.exit(1)

    uvicorn.run(
        "userbase.api.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Userbase CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # create-user
    create_parser = subparsers.add_parser("create-user", help="Create a user account")
    create_parser.add_argument("--name", required=True)
    create_parser.add_argument("--email", required=True)
    create_parser.add_argument("--telephone", default="")
    create_parser.add_argument("--password", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: APP_HOST)")
    serve_parser.add_argument("--port", type=int, help="Port (default: APP_PORT)")

    args = parser.parse_args()
    try:
        settings = Settings()
    except ConfigurationError as e:
        logger.critical("%s", e)
        sys.exit(1)

    if args.command == "migrate":
        handle_migrate(settings, args)
    elif args.command == "create-user":
        handle_create_user(settings, args)
    elif args.command == "serve":
        handle_serve(settings, args)


if __name__ == "__main__":
    main()
