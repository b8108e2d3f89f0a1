"""userbase - user management API with email/password login and bearer tokens."""

__version__ = "0.1.0"
