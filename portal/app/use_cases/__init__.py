"""
Use Cases

Organized by area:
- auth/: sign-up, sign-in, sessions, principals and roles
- invitations/: setup token verification and redemption
- clients/: client accounts, soft deletion and recovery
- widget/, sources/: chatbot configuration
- activity/, stats/, interactions/: dashboards and ingestion
- functions/: named server-side functions

Import from subdirectories.
"""
