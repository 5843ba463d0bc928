"""
Licenses module - license lifecycle management.

This module handles:
- License entity and key generation
- License lifecycle (create, extend, revoke)
- Admin client, persistence and audit log
"""
