# taskmanager/models/user.py
"""
Database models for users and their login sessions.
A user owns tasks and holds one AuthToken row per active login.
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Tasks (one-to-many, via related_name="tasks")
    - Has many AuthTokens (one-to-many, via related_name="tokens")

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Email must be unique across all users (stored lowercased)
    - Tokens and avatar are never part of the public profile (see to_public)
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    name = fields.TextField()  # Display name (trimmed, non-empty)
    age = fields.IntField(default=0)  # Non-negative age
    email = fields.CharField(
        max_length=256,
        unique=True,
        index=True
    )  # Login email (unique, lowercased, indexed for fast lookups)
    password_hash = fields.CharField(max_length=255)  # Argon2 hash, never plain text
    avatar = fields.BinaryField(null=True)  # 250x250 PNG after processing
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name

    def to_public(self) -> dict:
        """Profile representation: no password hash, tokens or avatar bytes."""
        return {
            "id": str(self.id),
            "name": self.name,
            "age": self.age,
            "email": self.email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class AuthToken(models.Model):
    """
    One issued bearer token (one login session).

    Each session is its own row so that login, logout and logout-all are
    single insert/delete statements and concurrent logins for the same user
    cannot overwrite each other.
    """
    id = fields.IntField(pk=True)  # Monotonic: preserves issue order
    user = fields.ForeignKeyField(
        "models.User",
        related_name="tokens",
        on_delete=fields.CASCADE
    )
    token = fields.CharField(max_length=512, unique=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "auth_tokens"
        ordering = ["id"]
