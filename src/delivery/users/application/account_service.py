"""
Account Service
Orchestrates the account lifecycle: signup, sign-in, token reissue, lookup,
search, profile/role updates and soft deletion.

Every operation runs inside one unit of work, i.e. one database transaction.
Authorization decisions are delegated to `delivery.users.domain.access_policy`;
the acting user is always an explicit `Actor` argument.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from delivery.shared.domain.base_entity import utcnow
from delivery.shared.domain.pagination import Page
from delivery.shared.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
)
from delivery.shared.logging import get_logger, log_security_event
from delivery.shared.security.tokens import TokenError, TokenKind
from delivery.users.application.dto import AccountView, TokenPair, UpdateProfileRequest
from delivery.users.application.ports import PasswordHasher, TokenIssuer
from delivery.users.domain import access_policy
from delivery.users.domain.access_policy import AccessOperation, Actor
from delivery.users.domain.account import Account
from delivery.users.domain.exceptions import DuplicateUsernameError
from delivery.users.domain.refresh_token import RefreshToken, hash_token
from delivery.users.domain.repositories import UsersUnitOfWork
from delivery.users.domain.role import Role
from delivery.users.domain.search import AccountSearchRequest, build_account_query

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid username or password."
INVALID_REFRESH_TOKEN = "Invalid refresh token."
INCORRECT_PASSWORD = "Incorrect password."
USERS_NOT_FOUND = "Users Not Found"


def _username_taken(username: str) -> ConflictError:
    return ConflictError(f"username already exists : {username}", details={"username": username})


def _not_found_by_id(account_id: UUID) -> NotFoundError:
    return NotFoundError(f"User Not Found By Id : {account_id}")


class AccountService:
    """
    Account lifecycle operations.

    Args:
        uow_factory: Returns a fresh unit of work exposing `accounts` and `refresh_tokens`
        hasher: Password hashing/verification
        tokens: Token issuer/decoder
        access_ttl / refresh_ttl: Token lifetimes
        email_matches_username: Legacy search behaviour (email filter applied to username)
        empty_search_is_not_found: Raise NotFound for an empty search page instead of returning it
        clock: Source of "now" (UTC)
    """

    def __init__(
        self,
        uow_factory: Callable[[], UsersUnitOfWork],
        hasher: PasswordHasher,
        tokens: TokenIssuer,
        *,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
        email_matches_username: bool = False,
        empty_search_is_not_found: bool = True,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = hasher
        self._tokens = tokens
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._email_matches_username = email_matches_username
        self._empty_search_is_not_found = empty_search_is_not_found
        self._clock = clock

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    async def _load_active(uow: UsersUnitOfWork, account_id: UUID) -> Account:
        account = await uow.accounts.find_active_by_id(account_id)
        if account is None:
            raise _not_found_by_id(account_id)
        return account

    @staticmethod
    def _require(actor: Actor, target_username: Optional[str], operation: AccessOperation) -> None:
        try:
            access_policy.require(actor, target_username, operation)
        except ForbiddenError:
            log_security_event(
                "access_denied",
                username=target_username,
                actor=actor.username,
                details={"operation": operation.value, "actor_role": actor.role.value},
            )
            raise

    async def _issue_pair(self, uow: UsersUnitOfWork, account: Account) -> TokenPair:
        role = account.role.value
        access = self._tokens.issue(TokenKind.ACCESS, account.username, account.email, role, self._access_ttl)
        refresh = self._tokens.issue(TokenKind.REFRESH, account.username, account.email, role, self._refresh_ttl)
        await uow.refresh_tokens.add(
            RefreshToken.for_token(account.id, refresh, self._clock() + self._refresh_ttl)
        )
        return TokenPair(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def signup(self, username: str, email: str, password: str, nickname: str) -> AccountView:
        """Register a CUSTOMER account. Usernames are unique across all accounts, deleted ones included."""
        async with self._uow_factory() as uow:
            if await uow.accounts.exists_by_username(username):
                raise _username_taken(username)

            account = Account.register(
                username=username,
                email=email,
                nickname=nickname,
                password_hash=self._hasher.hash(password),
            )
            try:
                account = await uow.accounts.add(account)
            except DuplicateUsernameError:
                # lost a concurrent signup race; the unique constraint decided
                raise _username_taken(username)
            await uow.commit()

        logger.info("Account registered", account_id=str(account.id), username=username)
        return AccountView.from_account(account)

    async def authenticate(self, username: str, password: str) -> TokenPair:
        """Verify credentials and issue an access/refresh token pair."""
        async with self._uow_factory() as uow:
            account = await uow.accounts.find_active_by_username(username)
            stored_hash = account.password_hash if account is not None else self._hasher.dummy_hash
            if not self._hasher.verify(password, stored_hash) or account is None:
                log_security_event(
                    "login_failed",
                    username=username,
                    details={"reason": "unknown_user" if account is None else "bad_password"},
                )
                raise InvalidCredentialsError(INVALID_CREDENTIALS)

            pair = await self._issue_pair(uow, account)
            await uow.commit()

        log_security_event("login_succeeded", username=username)
        return pair

    async def reissue(self, refresh_token: str) -> TokenPair:
        """Rotate a refresh token: the presented one is revoked and a new pair is issued."""
        try:
            claims = self._tokens.decode(refresh_token, TokenKind.REFRESH)
        except TokenError:
            raise InvalidCredentialsError(INVALID_REFRESH_TOKEN)

        async with self._uow_factory() as uow:
            record = await uow.refresh_tokens.get_by_hash(hash_token(refresh_token))
            if record is None or not record.is_usable(self._clock()):
                log_security_event("refresh_rejected", username=claims.get("username"))
                raise InvalidCredentialsError(INVALID_REFRESH_TOKEN)

            account = await uow.accounts.find_active_by_username(str(claims.get("username", "")))
            if account is None or account.id != record.account_id:
                raise InvalidCredentialsError(INVALID_REFRESH_TOKEN)

            record.revoke(self._clock())
            await uow.refresh_tokens.revoke(record)
            pair = await self._issue_pair(uow, account)
            await uow.commit()

        logger.info("Refresh token rotated", username=account.username)
        return pair

    async def get_by_id(self, account_id: UUID) -> AccountView:
        async with self._uow_factory() as uow:
            account = await self._load_active(uow, account_id)
        return AccountView.from_account(account)

    async def search(self, request: AccountSearchRequest) -> Page[AccountView]:
        query = build_account_query(request, email_matches_username=self._email_matches_username)

        async with self._uow_factory() as uow:
            page = await uow.accounts.search(query)

        if page.is_empty and self._empty_search_is_not_found:
            raise NotFoundError(USERS_NOT_FOUND)

        return Page(
            items=[AccountView.from_account(a) for a in page.items],
            total=page.total,
            page=page.page,
            size=page.size,
        )

    async def update_profile(self, account_id: UUID, actor: Actor, request: UpdateProfileRequest) -> AccountView:
        """
        Owner or MASTER only, and the stored current password must be supplied.
        Omitted fields (including the new password) keep their stored values.
        """
        async with self._uow_factory() as uow:
            account = await self._load_active(uow, account_id)
            self._require(actor, account.username, AccessOperation.UPDATE_PROFILE)

            if not self._hasher.verify(request.current_password, account.password_hash):
                log_security_event("profile_update_bad_password", username=account.username, actor=actor.username)
                raise ForbiddenError(INCORRECT_PASSWORD)

            account.update_profile(
                email=request.email,
                nickname=request.nickname,
                password_hash=self._hasher.hash(request.new_password) if request.new_password else None,
            )
            account = await uow.accounts.save(account)
            await uow.commit()

        logger.info("Account profile updated", account_id=str(account_id), actor=actor.username)
        return AccountView.from_account(account)

    async def update_role(self, account_id: UUID, actor: Actor, new_role: Role) -> AccountView:
        """MASTER only; checked before the target is loaded."""
        self._require(actor, None, AccessOperation.UPDATE_ROLE)

        async with self._uow_factory() as uow:
            account = await self._load_active(uow, account_id)
            previous = account.role
            account.change_role(new_role)
            account = await uow.accounts.save(account)
            await uow.commit()

        log_security_event(
            "role_changed",
            username=account.username,
            actor=actor.username,
            details={"from": previous.value, "to": new_role.value},
        )
        return AccountView.from_account(account)

    async def soft_delete(self, account_id: UUID, actor: Actor) -> AccountView:
        """Mark the account deleted and revoke its outstanding refresh tokens."""
        async with self._uow_factory() as uow:
            account = await self._load_active(uow, account_id)
            self._require(actor, account.username, AccessOperation.DELETE_ACCOUNT)

            account.soft_delete(by=actor.username, at=self._clock())
            account = await uow.accounts.save(account)
            revoked = await uow.refresh_tokens.revoke_all_for_account(account.id)
            await uow.commit()

        log_security_event(
            "account_deleted",
            username=account.username,
            actor=actor.username,
            details={"revoked_refresh_tokens": revoked},
        )
        return AccountView.from_account(account)
