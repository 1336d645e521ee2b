# taskmanager/core/security.py
"""
Security module for authentication.
Handles password hashing and signing/verifying bearer tokens.

The signing secret is always passed in by the caller (from Settings);
nothing in here reads the process environment.
"""
import datetime as dt
import uuid

import jwt  # PyJWT
from passlib.context import CryptContext

# Password hashing context
# Argon2 is a modern, adaptive password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)

JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)

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
    """
    Verify a plain text password against a hashed password.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain, hashed)

def create_access_token(user_id: str, secret: str) -> str:
    """
    Create a signed bearer token for one session of a user.

    Token payload:
        - sub: Subject (user ID), the only claim the server acts on
        - iat: Issued at timestamp
        - jti: Random token id, so two logins within the same second still
               produce distinct tokens

    No "exp" claim is set: a token stays valid until its session is revoked.
    """
    payload = {
        "sub": user_id,
        "iat": dt.datetime.now(dt.timezone.utc),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALG)

def decode_access_token(token: str, secret: str) -> dict:
    """
    Decode and validate a bearer token.

    Raises:
        jwt.InvalidTokenError: If the signature is invalid, the token is
            malformed, or the "sub" claim is missing
    """
    return jwt.decode(
        token,
        secret,
        algorithms=[JWT_ALG],
        options={"require": ["sub"]},
    )
