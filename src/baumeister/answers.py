"""Sources of raw answers: the interactive question flow and replay."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping

from rich.console import Console
from rich.prompt import Confirm, Prompt

from .config import load_config
from .context import MANDATORY_FIELDS, RESERVED_THEMES, BoilerplateAmount, License, ProjectType
from .errors import ConfigurationError
from .naming import slugify, titleize

__all__ = [
    "AnswerSource",
    "Choice",
    "InteractiveAnswerSource",
    "Prompter",
    "QUESTIONS",
    "Question",
    "QuestionKind",
    "ReplayAnswerSource",
    "RichPrompter",
    "default_issue_tracker",
    "validate_project_name",
    "validate_semver",
    "validate_theme",
]

LOGGER = logging.getLogger(__name__)

_SEMVER_PATTERN = re.compile(
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)

SEMVER_ERROR = "Please enter a valid semantic version number (e.g. 1.0.0)"


class QuestionKind(str, Enum):
    """How a question is presented to the user."""

    TEXT = "text"
    CHOICE = "choice"
    CONFIRM = "confirm"


@dataclass(frozen=True, slots=True)
class Choice:
    """One selectable option of a :attr:`QuestionKind.CHOICE` question."""

    value: str
    label: str


Answers = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class Question:
    """Declarative description of a single prompt.

    Attributes
    ----------
    key:
        Name of the answer in the raw answer record.
    message:
        Text shown to the user.
    kind:
        Whether the answer is free text, one of :attr:`choices` or yes/no.
    default:
        Value offered when the user just presses enter. A callable receives
        the answers collected so far and the directory the generator runs in.
    validate:
        Returns ``True`` for acceptable values and an error message otherwise.
    when:
        Visibility predicate over the answers collected so far. Hidden
        questions are skipped and their key is left out of the answers.
    store:
        Whether an answer remembered from a previous run replaces
        :attr:`default`.
    """

    key: str
    message: str
    kind: QuestionKind = QuestionKind.TEXT
    choices: tuple[Choice, ...] = ()
    default: Any = None
    validate: Callable[[Any], bool | str] | None = None
    when: Callable[[Answers], bool] | None = None
    store: bool = False

    def is_visible(self, answers: Answers) -> bool:
        return self.when is None or bool(self.when(answers))

    def resolve_default(self, answers: Answers, directory: Path) -> Any:
        if callable(self.default):
            return self.default(answers, directory)
        return self.default

    def check(self, value: Any) -> bool | str:
        """Return ``True`` if ``value`` is acceptable, otherwise an error message."""

        if self.kind is QuestionKind.CHOICE:
            allowed = [choice.value for choice in self.choices]
            if value not in allowed:
                return f"Please select one of: {', '.join(allowed)}"
        elif self.kind is QuestionKind.CONFIRM and not isinstance(value, bool):
            return "Please answer yes or no"
        if self.validate is None:
            return True
        return self.validate(value)


def validate_semver(value: Any) -> bool | str:
    """Accept ``MAJOR.MINOR.PATCH`` with optional pre-release and build metadata."""

    if isinstance(value, str) and _SEMVER_PATTERN.fullmatch(value.strip()):
        return True
    return SEMVER_ERROR


def validate_theme(value: Any) -> bool | str:
    """Accept theme names that produce a usable, unreserved slug."""

    theme = slugify(str(value or ""))
    if not theme:
        return "Please enter a theme name containing letters or digits"
    if theme in RESERVED_THEMES:
        return f"The theme name '{theme}' is reserved, please choose another one"
    return True


def validate_project_name(value: Any) -> bool | str:
    """Accept project names that produce a non-empty package name."""

    if not isinstance(value, str) or not value.strip():
        return "Please enter a value"
    if not slugify(value):
        return "Please enter a project name containing letters or digits"
    return True


def default_issue_tracker(answers: Answers, directory: Path | None = None) -> str:
    """Guess the issue tracker URL from the repository URL."""

    repository = str(answers.get("projectRepository") or "").strip()
    if not repository:
        return ""
    if repository.endswith(".git"):
        repository = repository[: -len(".git")]
    return f"{repository.rstrip('/')}/issues"


def _folder_title(answers: Answers, directory: Path) -> str:
    return titleize(directory.name.replace("-", " ").replace("_", " "))


def _wants_additional_info(answers: Answers) -> bool:
    return bool(answers.get("additionalInfo"))


QUESTIONS: tuple[Question, ...] = (
    Question(
        "projectName",
        "What's the name of your project?",
        default=_folder_title,
        validate=validate_project_name,
    ),
    Question("projectDescription", "A short description of your project:"),
    Question(
        "projectType",
        "What do you want to build?",
        kind=QuestionKind.CHOICE,
        choices=(
            Choice(
                ProjectType.STATIC_SITE.value,
                "A static website (Static site generator using Handlebars and Frontmatters)",
            ),
            Choice(ProjectType.SPA.value, "A single page application (using React)"),
        ),
        default=ProjectType.STATIC_SITE.value,
        store=True,
    ),
    Question(
        "theme",
        "How should your Bootstrap theme be named in the Sass files?",
        default="theme",
        validate=validate_theme,
    ),
    Question(
        "boilerplateAmount",
        "With how much boilerplate code would you like to get started?",
        kind=QuestionKind.CHOICE,
        choices=(
            Choice(BoilerplateAmount.LITTLE.value, "Just a little - Get started with a few example files"),
            Choice(BoilerplateAmount.MINIMUM.value, "Almost nothing - Just the minimum files and folders"),
        ),
        default=BoilerplateAmount.LITTLE.value,
        store=True,
    ),
    Question(
        "license",
        "Choose a license for your project",
        kind=QuestionKind.CHOICE,
        choices=(
            Choice(License.MIT.value, "MIT"),
            Choice(License.APACHE.value, "Apache License, Version 2.0"),
            Choice(License.GPL.value, "GNU GPLv3"),
            Choice(License.ALL_RIGHTS_RESERVED.value, "All rights reserved"),
        ),
        default=License.MIT.value,
        store=True,
    ),
    Question("authorName", "What's your name? (used in package.json and license)", store=True),
    Question(
        "authorUrl",
        "What's the URL of your website? (used in package.json and license)",
        store=True,
    ),
    Question(
        "initialVersion",
        "Which initial version should we put in the package.json?",
        default="0.0.0",
        validate=validate_semver,
        store=True,
    ),
    Question(
        "additionalInfo",
        "Do you like to add additional info to package.json? (email address, homepage, repository etc.)",
        kind=QuestionKind.CONFIRM,
        default=True,
        store=True,
    ),
    Question("authorMail", "What's your email address?", when=_wants_additional_info, store=True),
    Question("projectHomepage", "What's the URL of your project's homepage?", when=_wants_additional_info),
    Question(
        "projectRepositoryType",
        "What's the type of your project's repository?",
        default="git",
        when=_wants_additional_info,
    ),
    Question(
        "projectRepository",
        "What's the remote URL of your project's repository?",
        when=_wants_additional_info,
    ),
    Question(
        "banners",
        "Do you like to add comment headers containing meta information to your production files?",
        kind=QuestionKind.CONFIRM,
        default=False,
        store=True,
    ),
    Question(
        "addDistToVersionControl",
        "Do you like to add your production ready files (`dist` directory) to version control?",
        kind=QuestionKind.CONFIRM,
        default=False,
        store=True,
    ),
    Question(
        "issueTracker",
        "What's the URL of your project's issue tracker?",
        default=default_issue_tracker,
        when=_wants_additional_info,
    ),
)


class AnswerSource(ABC):
    """Producer of a raw answer record."""

    @abstractmethod
    def read(self) -> dict[str, Any]:
        """Return the raw answers for this run."""


class Prompter(ABC):
    """Presents a single question to the user and returns the answer."""

    @abstractmethod
    def ask(self, question: Question, default: Any) -> Any:
        """Ask ``question`` offering ``default`` and return the raw answer."""

    @abstractmethod
    def warn(self, message: str) -> None:
        """Tell the user why the previous answer was rejected."""


class RichPrompter(Prompter):
    """Terminal prompter built on :mod:`rich.prompt`."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def ask(self, question: Question, default: Any) -> Any:
        if question.kind is QuestionKind.CONFIRM:
            return Confirm.ask(question.message, console=self.console, default=bool(default))

        if question.kind is QuestionKind.CHOICE:
            for choice in question.choices:
                self.console.print(f"  [bold]{choice.value}[/bold]  {choice.label}")
            return Prompt.ask(
                question.message,
                console=self.console,
                choices=[choice.value for choice in question.choices],
                default=default,
            )

        text_default = "" if default is None else str(default)
        return Prompt.ask(
            question.message,
            console=self.console,
            default=text_default,
            show_default=bool(text_default),
        )

    def warn(self, message: str) -> None:
        self.console.print(f"[red]{message}[/red]")


@dataclass
class InteractiveAnswerSource(AnswerSource):
    """Ask :data:`QUESTIONS` one after another through a :class:`Prompter`."""

    prompter: Prompter
    stored: Mapping[str, Any] = field(default_factory=dict)
    directory: Path = field(default_factory=Path.cwd)
    questions: tuple[Question, ...] = QUESTIONS

    def _default_for(self, question: Question, answers: Answers) -> Any:
        if question.store and question.key in self.stored:
            remembered = self.stored[question.key]
            if question.check(remembered) is True:
                return remembered
            LOGGER.debug("ignoring stored value for %s", question.key)
        return question.resolve_default(answers, self.directory)

    def read(self) -> dict[str, Any]:
        answers: dict[str, Any] = {}
        for question in self.questions:
            if not question.is_visible(answers):
                LOGGER.debug("skipping hidden question %s", question.key)
                continue

            default = self._default_for(question, answers)
            while True:
                value = self.prompter.ask(question, default)
                verdict = question.check(value)
                if verdict is True:
                    break
                LOGGER.debug("rejected answer for %s: %r", question.key, value)
                self.prompter.warn(str(verdict))

            answers[question.key] = value
        return answers


class ReplayAnswerSource(AnswerSource):
    """Return the answers persisted by a previous run without prompting."""

    required = MANDATORY_FIELDS + ("theme",)

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> dict[str, Any]:
        record = load_config(self.path)
        missing = [key for key in self.required if key not in record]
        if missing:
            raise ConfigurationError(
                f"configuration file {self.path} is missing required keys: {', '.join(missing)}",
                field=missing[0],
            )
        verdict = validate_semver(record["initialVersion"])
        if verdict is not True:
            raise ConfigurationError(
                f"configuration file {self.path} has an invalid initialVersion "
                f"{record['initialVersion']!r}: {verdict}",
                field="initialVersion",
            )
        LOGGER.info("replaying answers from %s", self.path)
        return dict(record)
