"""CLI tests.

Learn: The CLI only talks HTTP, so it's tested against an
httpx.MockTransport that plays the API. _client is patched to use it.
"""

import json

import httpx
import pytest
from click.testing import CliRunner

from warden.cli import main as cli


def _api(request: httpx.Request) -> httpx.Response:
    path, method = request.url.path, request.method
    auth = request.headers.get("Authorization")

    if path == "/auth/signup" and method == "POST":
        body = json.loads(request.content)
        return httpx.Response(201, json={"id": 1, "email": body["email"]})
    if path == "/auth/login" and method == "POST":
        body = json.loads(request.content)
        if body["password"] != "password1234":
            return httpx.Response(403, json={"detail": "Invalid credentials"})
        return httpx.Response(
            200,
            json={"access_token": "tok-123", "token_type": "bearer", "expires_in": 1800},
        )

    if auth != "Bearer tok-123":
        return httpx.Response(401, json={"detail": "Authentication required"})

    if path == "/users/me":
        return httpx.Response(200, json={"id": 1, "email": "a@test.com"})
    if path == "/resources" and method == "GET":
        return httpx.Response(
            200, json=[{"id": 3, "title": "Docs", "link": "https://example.com"}]
        )
    if path == "/resources" and method == "POST":
        return httpx.Response(201, json={"id": 4, **json.loads(request.content)})
    if path == "/resources/3" and method == "GET":
        return httpx.Response(200, json={"id": 3, "title": "Docs"})
    if path == "/resources/3" and method == "DELETE":
        return httpx.Response(204)
    return httpx.Response(404, json={"detail": "Resource not found"})


@pytest.fixture(autouse=True)
def mock_api(monkeypatch):
    def _client(token=None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return httpx.AsyncClient(
            base_url="http://test",
            headers=headers,
            transport=httpx.MockTransport(_api),
        )

    monkeypatch.setattr(cli, "_client", _client)
    monkeypatch.delenv("WARDEN_TOKEN", raising=False)


@pytest.fixture
def runner():
    return CliRunner()


def test_signup(runner):
    result = runner.invoke(
        cli.main, ["signup", "a@test.com", "--password", "password1234"]
    )
    assert result.exit_code == 0, result.output
    assert "Account created: a@test.com" in result.output


def test_login_prints_token(runner):
    result = runner.invoke(
        cli.main, ["login", "a@test.com", "--password", "password1234"]
    )
    assert result.exit_code == 0, result.output
    assert "tok-123" in result.output


def test_login_bad_credentials(runner):
    result = runner.invoke(cli.main, ["login", "a@test.com", "--password", "nope"])
    assert result.exit_code == 1
    assert "403" in result.output


def test_me_requires_token(runner):
    result = runner.invoke(cli.main, ["me"])
    assert result.exit_code == 1
    assert "--token required" in result.output


def test_me_with_env_token(runner):
    result = runner.invoke(cli.main, ["me"], env={"WARDEN_TOKEN": "tok-123"})
    assert result.exit_code == 0, result.output
    assert '"email": "a@test.com"' in result.output


def test_resources_list(runner):
    result = runner.invoke(cli.main, ["resources", "list", "--token", "tok-123"])
    assert result.exit_code == 0, result.output
    assert "Docs" in result.output


def test_resources_create(runner):
    result = runner.invoke(
        cli.main,
        ["resources", "create", "Docs", "https://example.com", "-t", "tok-123"],
    )
    assert result.exit_code == 0, result.output
    assert "Resource #4 created" in result.output


def test_resources_show_and_delete(runner):
    result = runner.invoke(cli.main, ["resources", "show", "3", "-t", "tok-123"])
    assert result.exit_code == 0, result.output
    assert '"title": "Docs"' in result.output

    result = runner.invoke(cli.main, ["resources", "delete", "3", "-t", "tok-123"])
    assert result.exit_code == 0, result.output
    assert "Resource #3 deleted" in result.output


def test_resources_show_not_found(runner):
    result = runner.invoke(cli.main, ["resources", "show", "99", "-t", "tok-123"])
    assert result.exit_code == 1
    assert "404" in result.output
