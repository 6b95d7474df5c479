"""Warden CLI — sign up, log in, and manage your resources from a terminal.

Usage:
    warden signup a@test.com                     # Prompts for a password
    warden login a@test.com                      # Prints an access token
    export WARDEN_TOKEN=<token>
    warden me                                    # Your profile
    warden resources list                        # Your resources
    warden resources create "Docs" https://...   # Create one
    warden resources show 3                      # Show one
    warden resources delete 3                    # Delete one
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8000"


def _api_url() -> str:
    return os.environ.get("WARDEN_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Warden API."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.AsyncClient(base_url=_api_url(), headers=headers, timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _require_token(token: Optional[str]) -> str:
    """Resolve the access token from --token or WARDEN_TOKEN."""
    tok = token or os.environ.get("WARDEN_TOKEN")
    if not tok:
        click.secho(
            "Error: --token required (or set WARDEN_TOKEN env var)",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return tok


def _check(r: httpx.Response) -> dict | list | None:
    """Exit with the API's error message on any non-2xx response."""
    if r.is_success:
        return r.json() if r.content else None
    try:
        detail = r.json().get("detail", r.text)
    except ValueError:
        detail = r.text
    click.secho(f"Error ({r.status_code}): {detail}", fg="red", err=True)
    sys.exit(1)


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


token_option = click.option(
    "--token", "-t", help="Access token (or set WARDEN_TOKEN)"
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version="0.1.0", prog_name="warden")
def main():
    """Warden — authenticate and manage the resources you own."""


# ---------------------------------------------------------------------------
# warden signup / login / me
# ---------------------------------------------------------------------------


@main.command()
@click.argument("email")
@click.password_option()
def signup(email: str, password: str):
    """Create an account for EMAIL."""
    _run(_signup_impl(email, password))


async def _signup_impl(email: str, password: str):
    async with _client() as c:
        r = await c.post("/auth/signup", json={"email": email, "password": password})
        user = _check(r)
    click.secho(f"Account created: {user['email']} (id {user['id']})", fg="green")


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
def login(email: str, password: str):
    """Log in as EMAIL and print an access token."""
    _run(_login_impl(email, password))


async def _login_impl(email: str, password: str):
    async with _client() as c:
        r = await c.post("/auth/login", json={"email": email, "password": password})
        tokens = _check(r)
    click.echo(tokens["access_token"])
    click.secho(
        f"Expires in {tokens['expires_in'] // 60} min. "
        "Export it as WARDEN_TOKEN to use the other commands.",
        fg="cyan",
        err=True,
    )


@main.command()
@token_option
def me(token: Optional[str]):
    """Show the profile of the logged-in user."""
    _run(_me_impl(_require_token(token)))


async def _me_impl(token: str):
    async with _client(token) as c:
        user = _check(await c.get("/users/me"))
    click.echo(_pretty_json(user))


# ---------------------------------------------------------------------------
# warden resources ...
# ---------------------------------------------------------------------------


@main.group()
def resources():
    """List, create, show and delete your resources."""


@resources.command("list")
@token_option
def list_resources(token: Optional[str]):
    """List the resources you own."""
    _run(_list_impl(_require_token(token)))


async def _list_impl(token: str):
    async with _client(token) as c:
        items = _check(await c.get("/resources"))

    if not items:
        click.echo("No resources found.")
        return

    click.secho(f"Resources ({len(items)}):", bold=True)
    click.echo()
    for item in items:
        click.echo(f"  #{item['id']:<5d}  {item['title'][:40]:40s}  {item['link']}")


@resources.command("create")
@click.argument("title")
@click.argument("link")
@click.option("--description", "-d", help="Optional description")
@token_option
def create_resource(title: str, link: str, description: Optional[str], token: Optional[str]):
    """Create a resource with TITLE pointing at LINK."""
    _run(_create_impl(_require_token(token), title, link, description))


async def _create_impl(token: str, title: str, link: str, description: Optional[str]):
    body: dict = {"title": title, "link": link}
    if description:
        body["description"] = description
    async with _client(token) as c:
        item = _check(await c.post("/resources", json=body))
    click.secho(f"Resource #{item['id']} created", fg="green")


@resources.command("show")
@click.argument("resource_id", type=int)
@token_option
def show_resource(resource_id: int, token: Optional[str]):
    """Show one of your resources."""
    _run(_show_impl(_require_token(token), resource_id))


async def _show_impl(token: str, resource_id: int):
    async with _client(token) as c:
        item = _check(await c.get(f"/resources/{resource_id}"))
    click.echo(_pretty_json(item))


@resources.command("delete")
@click.argument("resource_id", type=int)
@token_option
def delete_resource(resource_id: int, token: Optional[str]):
    """Delete one of your resources."""
    _run(_delete_impl(_require_token(token), resource_id))


async def _delete_impl(token: str, resource_id: int):
    async with _client(token) as c:
        _check(await c.delete(f"/resources/{resource_id}"))
    click.secho(f"Resource #{resource_id} deleted", fg="green")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
