#!/usr/bin/env python3
"""
Warden Quickstart — identity + ownership in one script.

Signs up two users, logs both in, creates a resource as the first, and
shows that the second can't see it (404, not 403).
Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: http://localhost:8000
"""

import sys
import uuid

import httpx

BASE = "http://localhost:8000"
PASSWORD = "demo-password-123"


def register(client: httpx.Client, label: str) -> dict:
    """Sign up + log in a fresh user, return auth headers."""
    email = f"{label}-{uuid.uuid4().hex[:8]}@example.com"

    resp = client.post("/auth/signup", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 201, f"Signup failed: {resp.text}"

    resp = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200, f"Login failed: {resp.text}"
    token = resp.json()["access_token"]

    print(f"   {label}: {email}")
    return {"Authorization": f"Bearer {token}"}


def main():
    client = httpx.Client(base_url=BASE, timeout=10)

    # ── Health check ──────────────────────────────────────────────
    print("Checking backend health...")
    try:
        resp = client.get("/health")
    except httpx.ConnectError:
        print(f"Backend not reachable at {BASE}")
        print("Start it with:  uvicorn warden.main:app --reload --port 8000")
        sys.exit(1)
    health = resp.json()
    print(f"  Database: {'✓' if health['database'] == 'ok' else '✗'}")

    # ── Users ─────────────────────────────────────────────────────
    print("\n1. Registering two users...")
    alice = register(client, "alice")
    bob = register(client, "bob")

    resp = client.get("/users/me", headers=alice)
    print(f"   /users/me as alice → {resp.status_code} {resp.json()['email']}")

    resp = client.get("/users/me")
    print(f"   /users/me with no token → {resp.status_code}")

    # ── Resources ─────────────────────────────────────────────────
    print("\n2. Alice creates a resource...")
    resp = client.post(
        "/resources",
        json={"title": "Reading list", "link": "https://example.com/reading"},
        headers=alice,
    )
    assert resp.status_code == 201, f"Failed: {resp.text}"
    resource = resp.json()
    print(f"   Resource #{resource['id']} owned by user {resource['owner_id']}")

    print("\n3. Bob tries to read it...")
    resp = client.get(f"/resources/{resource['id']}", headers=bob)
    print(f"   GET /resources/{resource['id']} as bob → {resp.status_code}")

    resp = client.get("/resources", headers=bob)
    print(f"   Bob's list: {resp.json()}")

    print("\n4. Alice deletes it...")
    resp = client.delete(f"/resources/{resource['id']}", headers=alice)
    print(f"   DELETE → {resp.status_code}")

    print("\nDone.")


if __name__ == "__main__":
    main()
