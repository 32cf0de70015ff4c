"""
Authentication service.

Registration and login with account lockout. Every expected outcome is
returned as a ``Result[AuthResponse]``; only unexpected faults raise.
"""

import math
from datetime import datetime, timedelta
from typing import Callable

from fastapi import status

from app.crud.user import CRUDUser
from app.exceptions import UsernameAlreadyExistsError
from app.models.user import User, utcnow
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.schemas.base import Result
from app.services.validators import validate_login_request, validate_register_request
from app.utils.localization import Localizer
from app.utils.logging_config import get_logger
from app.utils.security import PasswordHasher, TokenIssuer

logger = get_logger(__name__)

AuthResult = Result[AuthResponse]


class AuthService:
    """
    Orchestrates validation, lockout checks, credential verification,
    persistence and token issuance.

    The service keeps no state of its own between calls.
    """

    def __init__(
        self,
        users: CRUDUser,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        localizer: Localizer,
        max_failed_attempts: int = 5,
        lockout_duration: timedelta = timedelta(minutes=15),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.users = users
        self.password_hasher = password_hasher
        self.token_issuer = token_issuer
        self.localizer = localizer
        self.max_failed_attempts = max_failed_attempts
        self.lockout_duration = lockout_duration
        self.clock = clock

    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Register a new user and issue a token.

        Args:
            request: Username and password

        Returns:
            200 with the token, 400 on validation errors, 409 if the username is taken
        """
        errors = validate_register_request(request, self.localizer)
        if errors:
            return AuthResult.validation_error(errors, self.localizer["ValidationFailed"])

        if await self.users.username_exists(request.username):
            return AuthResult.error_response(
                self.localizer["UsernameAlreadyExists"], status.HTTP_409_CONFLICT
            )

        password_hash = self.password_hasher.hash_password(request.password)
        user = User(request.username, password_hash)

        try:
            user = await self.users.add(user)
        except UsernameAlreadyExistsError:
            # Lost a race with a concurrent registration of the same name
            return AuthResult.error_response(
                self.localizer["UsernameAlreadyExists"], status.HTTP_409_CONFLICT
            )

        logger.info(f"Registered user '{user.username}' ({user.id})")
        return AuthResult.success_response(
            self._auth_response(user), self.localizer["UserRegisteredSuccessfully"]
        )

    async def login(self, request: LoginRequest) -> AuthResult:
        """
        Authenticate a user and issue a token.

        A locked account is rejected before the password is checked. A
        wrong password counts towards the lockout threshold.

        Args:
            request: Username and password

        Returns:
            200 with the token, 400 on validation errors, 401 otherwise
        """
        errors = validate_login_request(request, self.localizer)
        if errors:
            return AuthResult.validation_error(errors, self.localizer["ValidationFailed"])

        user = await self.users.get_by_username(request.username)
        if user is None:
            return self._invalid_credentials()

        now = self.clock()
        if user.is_locked_out(now):
            remaining = user.lockout_remaining(now)
            minutes = math.ceil(remaining.total_seconds() / 60)
            logger.warning(f"Login rejected for locked account '{user.username}' ({minutes} min left)")
            return AuthResult.error_response(
                self.localizer.format("AccountLocked", minutes=minutes),
                status.HTTP_401_UNAUTHORIZED,
            )

        if not self.password_hasher.verify_password(request.password, user.password_hash):
            user.increment_failed_attempts(self.max_failed_attempts, self.lockout_duration, now)
            await self.users.update(user)
            if user.is_locked_out(now):
                logger.warning(
                    f"Account '{user.username}' locked after {user.failed_login_attempts} failed attempts"
                )
            else:
                logger.info(
                    f"Failed login for '{user.username}' "
                    f"({user.failed_login_attempts}/{self.max_failed_attempts})"
                )
            return self._invalid_credentials()

        user.reset_failed_attempts()
        await self.users.update(user)

        return AuthResult.success_response(
            self._auth_response(user), self.localizer["LoginSuccessful"]
        )

    def _auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            token=self.token_issuer.create_access_token(user),
            user_id=user.id,
            username=user.username,
        )

    def _invalid_credentials(self) -> AuthResult:
        return AuthResult.error_response(
            self.localizer["InvalidCredentials"], status.HTTP_401_UNAUTHORIZED
        )
