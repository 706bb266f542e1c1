"""
Authentication subsystem.

Components:
- session_store.py: SessionStore (login/logout, persisted session record, auth state)
- session_storage.py: durable key/value storage for the session record
- login.py: LoginController (credential form workflow)
"""
