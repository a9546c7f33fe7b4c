from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from fastapi import HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from bilibay.config.settings import get_settings


class TokenService:
    """
    Service for password hashing and JWT access tokens.

    Tokens are stateless: they carry the user id (``sub``) and ``role``
    and are trusted until they expire.
    """

    def __init__(self):
        self.settings = get_settings()
        self.oauth2_scheme = OAuth2PasswordBearer(
            tokenUrl=f"{self.settings.API_V1_STR}/auth/token", auto_error=False
        )

        self.SECRET_KEY = self.settings.JWT_SECRET_KEY
        self.ALGORITHM = self.settings.JWT_ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Check a password against its bcrypt hash"""
        password_bytes = plain_password.encode("utf-8")
        hash_bytes = hashed_password.encode("utf-8")
        try:
            return bcrypt.checkpw(password_bytes, hash_bytes)
        except ValueError:
            # Malformed hash
            return False

    def get_password_hash(self, password: str) -> str:
        """Hash a password with a fresh salt"""
        password_bytes = password.encode("utf-8")
        salt = bcrypt.gensalt()
        hash_bytes = bcrypt.hashpw(password_bytes, salt)
        return hash_bytes.decode("utf-8")

    def create_access_token(self, data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a signed access token

        Args:
            data: Claims to include (``sub`` and ``role``)
            expires_delta: Lifetime override

        Returns:
            Encoded JWT
        """
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)

        to_encode.update({"exp": expire, "iat": datetime.now(timezone.utc)})
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Decode and validate a token (signature and expiry)

        Raises:
            HTTPException: 401 for any invalid token
        """
        try:
            return jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
        except JWTError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unauthorized",
                headers={"WWW-Authenticate": "Bearer"},
            ) from e
