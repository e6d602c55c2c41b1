from __future__ import annotations

import pytest
from click.testing import CliRunner


class StubSession:
    def __init__(self, language: str):
        self.language = language
        self.lines: list[str] = []

    def feed(self, line: str) -> None:
        self.lines.append(line)

    def finalize(self) -> str:
        return f'<span class="{self.language}">{"".join(self.lines)}</span>'


class StubHighlighter:
    """Resolves only JavaScript and TypeScript, by name or short alias."""

    ALIASES = {
        "js": "javascript",
        "javascript": "javascript",
        "ts": "typescript",
        "typescript": "typescript",
    }

    def __init__(self):
        self.sessions: list[StubSession] = []

    def resolve(self, language: str) -> StubSession | None:
        name = self.ALIASES.get(language.lower())
        if name is None:
            return None
        session = StubSession(name)
        self.sessions.append(session)
        return session


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def stub_highlighter() -> StubHighlighter:
    """Provides a highlighter that only knows js/javascript and ts/typescript."""
    return StubHighlighter()
