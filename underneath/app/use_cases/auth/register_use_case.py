import logging

import bcrypt

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.entities import PointAccount, User, UserRole
from underneath.domain.validation import (
    is_valid_email,
    validate_display_name,
    validate_password,
)
from underneath.result import Error, Result, Return

from .register_dto import AuthResponse, RegisterCommand
from .tokens import new_session, user_info

logger = logging.getLogger(__name__)

SELF_REGISTERED_ROLES = (UserRole.DOM, UserRole.SUB, UserRole.OBSERVER)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Validate email, password strength, password confirmation, role and
       display name; report every violation at once
    2. Reject duplicate emails
    3. Hash password with bcrypt cost factor 12
    4. Create User (and a PointAccount for SUBs)
    5. Create Session with refresh token
    6. Commit and return tokens
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @staticmethod
    def _collect_violations(command: RegisterCommand) -> list[str]:
        errors = []

        if not is_valid_email(command.email):
            errors.append("Invalid email format")

        errors.extend(validate_password(command.password).errors)

        if command.password != command.confirm_password:
            errors.append("Passwords do not match")

        if command.role.upper() not in {r.value for r in SELF_REGISTERED_ROLES}:
            errors.append("Role must be DOM, SUB, or OBSERVER")

        if command.display_name is not None:
            errors.extend(validate_display_name(command.display_name).errors)

        return errors

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        violations = self._collect_violations(command)
        if violations:
            return Return.err(
                Error("VALIDATION_FAILED", "Registration data is invalid", violations)
            )

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                role=UserRole(command.role.upper()),
                display_name=command.display_name,
            )
            user = await self.uow.users.create(user)

            if user.role == UserRole.SUB:
                await self.uow.point_accounts.create(PointAccount(user_id=user.id))

            session, refresh_token = new_session(user)
            await self.uow.sessions.create(session)

            await self.uow.commit()

            logger.info(f"User registered: {user.id} ({user.role.value})")

            # Import JWT utility here to avoid circular dependency
            from underneath.api.utils.jwt import generate_jwt

            return Return.ok(
                AuthResponse(
                    user=user_info(user),
                    access_token=generate_jwt(user.id, user.role.value),
                    refresh_token=refresh_token,
                    session_id=str(session.id),
                )
            )
