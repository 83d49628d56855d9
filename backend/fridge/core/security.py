# fridge/core/security.py
"""
Security module for authentication.
Handles password hashing and JWT access tokens. This is the credential
verifier: it turns a bearer token into a trusted ``Claim`` and nothing more;
authorization rules live in ``fridge.core.access``.
"""
import os
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext
from dotenv import load_dotenv
from pathlib import Path

from fridge.core.access import Claim
from fridge.core.errors import Unauthorized

# Load environment variables from the backend root
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

# Argon2 only; passwords are never stored in plain text
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

# JWT configuration
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")  # Use a strong secret in production
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # One day
JWT_ALG = "HS256"

def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    """Return True if ``plain`` matches the stored Argon2 hash."""
    return pwd_context.verify(plain, hashed)

def create_access_token(user_id: str, role: str, expires_minutes: int | None = None) -> str:
    """
    Create a JWT access token carrying the identity claim.

    The token includes user ID and role so the API layer can build a
    ``Claim`` for every request.

    Token payload:
        - sub: user id
        - role: "user" or "admin"
        - iat / exp: issue and expiry timestamps
    """
    now = dt.datetime.now(dt.timezone.utc)
    minutes = ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    payload = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + dt.timedelta(minutes=minutes),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or malformed
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])

def verify_access_token(token: str) -> Claim:
    """
    Verify a bearer token and return the identity claim it asserts.

    Raises:
        Unauthorized: AUTH_TOKEN_EXPIRED for an expired token,
            AUTH_INVALID_TOKEN for anything else that fails verification
            or lacks a subject/role.
    """
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired", code="AUTH_TOKEN_EXPIRED")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token", code="AUTH_INVALID_TOKEN")

    sub = payload.get("sub")
    role = payload.get("role")
    if not sub or role not in ("user", "admin"):
        raise Unauthorized("Invalid token", code="AUTH_INVALID_TOKEN")
    return Claim(id=str(sub), role=role)
