from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from baumeister.answers import Prompter, Question  # noqa: E402
from baumeister.context import TemplateContext, build_context  # noqa: E402

FIXED_YEAR = 2024


class ScriptedPrompter(Prompter):
    """Answer questions from a script, falling back to the offered default.

    A list value is consumed one entry per time the question is asked, which
    lets tests feed invalid answers followed by valid ones.
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = {
            key: list(value) if isinstance(value, list) else [value]
            for key, value in (responses or {}).items()
        }
        self.asked: list[str] = []
        self.defaults: dict[str, Any] = {}
        self.warnings: list[str] = []

    def ask(self, question: Question, default: Any) -> Any:
        self.asked.append(question.key)
        self.defaults.setdefault(question.key, default)
        queue = self.responses.get(question.key)
        if queue:
            return queue.pop(0)
        return "" if default is None else default

    def warn(self, message: str) -> None:
        self.warnings.append(message)


@pytest.fixture()
def scripted_prompter() -> type[ScriptedPrompter]:
    return ScriptedPrompter


@pytest.fixture()
def raw_answers() -> dict[str, Any]:
    return {
        "projectName": "My Cool Site",
        "projectDescription": "A site for demos",
        "projectType": "staticSite",
        "theme": "Dark Knight",
        "boilerplateAmount": "little",
        "license": "MIT",
        "authorName": "Jane Doe",
        "authorUrl": "https://example.com",
        "initialVersion": "1.0.0",
        "additionalInfo": True,
        "authorMail": "jane@example.com",
        "projectHomepage": "https://example.com/site",
        "projectRepositoryType": "git",
        "projectRepository": "https://github.com/jane/site.git",
        "banners": False,
        "addDistToVersionControl": False,
        "issueTracker": "https://github.com/jane/site/issues",
    }


@pytest.fixture()
def make_context(raw_answers: dict[str, Any]) -> Callable[..., TemplateContext]:
    def factory(**overrides: Any) -> TemplateContext:
        return build_context({**raw_answers, **overrides}, clock=lambda: FIXED_YEAR)

    return factory
