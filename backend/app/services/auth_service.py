"""
HealthTrack Backend — Auth Service (Registration & Login)
==========================================================

What:  Creates accounts and exchanges credentials for identity tokens.
Why:   Keeps credential rules (required fields, duplicate emails, uniform
       login failures) out of the HTTP layer.
How:   Parameterized SQLAlchemy queries against `users`; bcrypt and JWT
       primitives from app.security.
Who:   Called by the /register and /login route handlers.

Information leak policy:
    Unknown email and wrong password both raise the same AuthError
    ("Invalid credentials") so the endpoint cannot be used to discover
    which emails are registered.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import AuthError, ConflictError, DatabaseError, ValidationError
from app.models.user import User
from app.schemas.auth import RegisterResponse, TokenResponse
from app.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """
    Business logic for account creation and login.

    Stateless: the database session is passed into every call.
    """

    async def register(
        self,
        db: AsyncSession,
        name: str,
        email: str,
        password: str,
    ) -> RegisterResponse:
        """
        Register a new user.

        Raises:
            ValidationError: Any of name/email/password missing or empty (→ 400)
            ConflictError: Email already registered (→ 409)
            DatabaseError: Query or insert failed (→ 500)
        """
        if not name or not email or not password:
            raise ValidationError(message="All fields required")

        try:
            existing = await db.execute(select(User.id).where(User.email == email))
            if existing.scalar_one_or_none() is not None:
                raise ConflictError(message="Email already exists")

            user = User(
                name=name,
                email=email,
                password_hash=await hash_password(password),
            )
            db.add(user)
            await db.flush()  # Assigns the serial id
            await db.commit()

        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            await db.rollback()
            raise ConflictError(message="Email already exists")
        except SQLAlchemyError as e:
            logger.error("Registration error: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "register"})

        logger.info("User registered: id=%s", user.id)
        return RegisterResponse(user_id=user.id)

    async def login(self, db: AsyncSession, email: str, password: str) -> TokenResponse:
        """
        Verify credentials and issue a token.

        Raises:
            ValidationError: email or password missing (→ 400)
            AuthError: Unknown email or wrong password (→ 401, same payload)
            DatabaseError: Query failed (→ 500)
        """
        if not email or not password:
            raise ValidationError(message="All fields required")

        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Login error: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "login"})

        if user is None or not await verify_password(password, user.password_hash):
            raise AuthError(message="Invalid credentials")

        return TokenResponse(token=create_access_token(user.id))


auth_service = AuthService()
