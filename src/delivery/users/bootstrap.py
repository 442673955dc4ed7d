# bootstrap.py
# Usage:
#   python -m delivery.users.bootstrap root root@mail.com --nickname Root
# The password is read from --password, or prompted for when omitted.
# DATABASE_URL / SECRET_KEY come from the environment (or .env), as for the API.
"""
Create the first MASTER account directly in the database.

MASTER cannot be obtained through signup; this is the out-of-band path.
Usernames stay unique across all accounts, exactly as for signup.
"""
from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from typing import Optional, Sequence

from delivery.config import get_settings
from delivery.shared.exceptions import ConflictError
from delivery.shared.infrastructure.database.session import DatabaseSessionFactory
from delivery.shared.logging import get_logger, log_security_event, setup_logging
from delivery.shared.security.passwords import Argon2PasswordHasher
from delivery.users.application.dto import AccountView
from delivery.users.application.ports import PasswordHasher
from delivery.users.domain.account import Account
from delivery.users.domain.exceptions import DuplicateUsernameError
from delivery.users.domain.role import Role
from delivery.users.infrastructure.unit_of_work import SQLAlchemyUsersUnitOfWork

logger = get_logger(__name__)


async def create_master(
    database: DatabaseSessionFactory,
    hasher: PasswordHasher,
    *,
    username: str,
    email: str,
    password: str,
    nickname: str,
) -> AccountView:
    """
    Raises:
        ConflictError: username already taken (deleted accounts included)
    """
    async with SQLAlchemyUsersUnitOfWork(database) as uow:
        if await uow.accounts.exists_by_username(username):
            raise ConflictError(f"username already exists : {username}", details={"username": username})
        try:
            account = await uow.accounts.add(
                Account(
                    username=username,
                    email=email,
                    nickname=nickname,
                    password_hash=hasher.hash(password),
                    role=Role.MASTER,
                )
            )
        except DuplicateUsernameError:
            raise ConflictError(f"username already exists : {username}", details={"username": username})
        await uow.commit()

    log_security_event("master_bootstrapped", username=username, actor="bootstrap")
    return AccountView.from_account(account)


async def _run(args: argparse.Namespace) -> AccountView:
    settings = get_settings()
    database = DatabaseSessionFactory(settings.database_url, echo=settings.database_echo)
    try:
        await database.create_all()
        return await create_master(
            database,
            Argon2PasswordHasher(),
            username=args.username,
            email=args.email,
            password=args.password,
            nickname=args.nickname or args.username,
        )
    finally:
        await database.dispose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Create a MASTER account.")
    ap.add_argument("username")
    ap.add_argument("email")
    ap.add_argument("--nickname", help="Display name (default: the username)")
    ap.add_argument("--password", help="Password (prompted for when omitted)")
    args = ap.parse_args(argv)

    setup_logging(get_settings())
    if not args.password:
        args.password = getpass.getpass("Password: ")
    if not args.password:
        ap.error("password must not be empty")

    try:
        view = asyncio.run(_run(args))
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1

    print(f"MASTER account created: {view.username} ({view.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
