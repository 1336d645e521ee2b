# taskmanager/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- errors: Application error taxonomy mapped to HTTP status classes
- security: Password hashing and bearer token signing
"""
