"""Testes de render_template."""

from __future__ import annotations

import pytest

from app.services import USERNAME_FALLBACK, render_template


def test_replaces_every_occurrence() -> None:
    rendered = render_template("Hi {{username}}! Bye {{ username }}.", "alice")
    assert rendered == "Hi alice! Bye alice."


@pytest.mark.parametrize("username", [None, "", "   "])
def test_fallback_when_username_missing(username: str | None) -> None:
    rendered = render_template("Hey {{username}}, {{  username  }}", username)
    assert rendered == f"Hey {USERNAME_FALLBACK}, {USERNAME_FALLBACK}"
    assert "{{" not in rendered


def test_fallback_is_there() -> None:
    assert render_template("Hi {{username}}") == "Hi there"


def test_unknown_tokens_left_verbatim() -> None:
    assert render_template("{{name}} {{username}}", "bob") == "{{name}} bob"


def test_username_inserted_literally() -> None:
    assert render_template("{{username}}", r"a\1b\g<0>") == r"a\1b\g<0>"


def test_template_without_tokens_unchanged() -> None:
    assert render_template("plain text", "bob") == "plain text"
