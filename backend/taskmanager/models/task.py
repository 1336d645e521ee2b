# taskmanager/models/task.py
"""
Database model for tasks.
Every task belongs to exactly one user (its owner) and is only reachable
through requests authenticated as that owner.
"""
import uuid
from tortoise import fields, models

DESCRIPTION_MAX_LENGTH = 50

class Task(models.Model):
    """
    Task database model.

    Relationships:
    - Belongs to a User (many-to-one via owner)

    The owner is set from the authenticated identity on creation and is
    never updated afterwards.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.TextField()
    description = fields.CharField(max_length=DESCRIPTION_MAX_LENGTH)
    notes = fields.TextField(default="")
    priority = fields.TextField(default="Low")
    completed = fields.BooleanField(default=False)
    owner = fields.ForeignKeyField(
        "models.User",
        related_name="tasks",
        on_delete=fields.CASCADE
    )  # Tasks are removed explicitly on account deletion; cascade is the store-level backstop
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "tasks"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "notes": self.notes,
            "priority": self.priority,
            "completed": self.completed,
            "owner": str(self.owner_id),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
