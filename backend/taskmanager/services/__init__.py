"""
Services Module

Application logic behind the routers:
- sessions: bearer token issuance, verification and revocation
- users: signup, login, profile, account deletion, avatar
- tasks: owner-scoped task CRUD and listing
- email: transactional email (SendGrid)
- avatar: image validation and resizing (Pillow)
"""
