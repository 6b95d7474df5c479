"""Warden — identity and access control for a multi-tenant resource API.

Verifies user credentials, issues short-lived bearer tokens, authenticates
requests, and makes sure each user only ever sees the resources they own.
"""

__version__ = "0.1.0"
