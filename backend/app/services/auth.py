from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
import bcrypt
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from app.config import settings
from app.models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    """Password hashing and JWT handling for the admin panel"""

    def __init__(self):
        self.secret_key = settings.secret_key
        self.algorithm = settings.algorithm
        self.access_token_expire = timedelta(minutes=settings.access_token_expire_minutes)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )

    def get_password_hash(self, password: str) -> str:
        return bcrypt.hashpw(
            password.encode('utf-8'),
            bcrypt.gensalt(rounds=12)
        ).decode('utf-8')

    def create_access_token(self, user: User) -> str:
        """Create JWT access token; `sub` carries the user id as a string"""
        expire = datetime.now(timezone.utc) + self.access_token_expire
        to_encode = {"sub": str(user.id), "email": user.email, "exp": expire, "type": "access"}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    @property
    def expires_in(self) -> int:
        return int(self.access_token_expire.total_seconds())

    async def get_current_user_from_token(self, token: str, db: AsyncSession) -> Optional[User]:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"JWT decode error: {e}")
            return None

        user_id_str = payload.get("sub")
        if user_id_str is None or payload.get("type") != "access":
            return None

        result = await db.execute(select(User).where(User.id == int(user_id_str)))
        return result.scalar_one_or_none()

    async def authenticate_user(self, db: AsyncSession, email: str, password: str) -> Optional[User]:
        """Authenticate user by email and password"""
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if not user:
            return None

        if not self.verify_password(password, user.hashed_password):
            return None

        if not user.is_active:
            return None

        return user

    async def create_user(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        username: Optional[str] = None,
        is_admin: bool = False,
    ) -> User:
        # Generate username from email if not provided
        if not username:
            username = email.split('@')[0]

        user = User(
            email=email,
            username=username,
            hashed_password=self.get_password_hash(password),
            full_name=full_name,
            is_admin=is_admin,
            is_active=True,
        )

        db.add(user)
        await db.commit()
        await db.refresh(user)

        return user


# Singleton instance
auth_service = AuthService()
