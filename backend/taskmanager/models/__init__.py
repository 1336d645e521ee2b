# taskmanager/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: User account and authentication model
- AuthToken: One issued bearer token (login session) of a User
- Task: Task owned by a User
"""
from .user import User, AuthToken
from .task import Task
