"""Authentication and authorization.

Learn: Three layers, leaves first:
1. password.py → bcrypt hash/verify
2. jwt.py → TokenIssuer signs/verifies short-lived bearer tokens
3. dependencies.py / ownership.py → per-request identity + owner checks

Signup and login orchestration lives in services/auth_service.py.
"""
