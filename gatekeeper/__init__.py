"""Gatekeeper: account signup, login and role-gated access over JWT bearer tokens."""

__version__ = "0.1.0"
