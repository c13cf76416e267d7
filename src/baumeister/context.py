"""Canonical template context derived from the collected answers."""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigurationError
from .naming import camelize, slugify, titleize

__all__ = [
    "BoilerplateAmount",
    "GATED_FIELDS",
    "License",
    "MANDATORY_FIELDS",
    "RESERVED_THEMES",
    "ProjectType",
    "TemplateContext",
    "build_context",
    "current_year",
]

LOGGER = logging.getLogger(__name__)


class ProjectType(str, Enum):
    """Kind of project the generated build targets."""

    STATIC_SITE = "staticSite"
    SPA = "spa"


class License(str, Enum):
    """Licenses a generated project can be published under."""

    MIT = "MIT"
    APACHE = "Apache-2.0"
    GPL = "GPLv3"
    ALL_RIGHTS_RESERVED = "AllRightsReserved"


class BoilerplateAmount(str, Enum):
    """Amount of example code shipped with a new project."""

    LITTLE = "little"
    MINIMUM = "minimum"


MANDATORY_FIELDS = (
    "projectName",
    "projectType",
    "license",
    "boilerplateAmount",
    "initialVersion",
)

# Only asked when ``additionalInfo`` is answered with yes.
GATED_FIELDS = (
    "authorMail",
    "projectHomepage",
    "projectRepositoryType",
    "projectRepository",
    "issueTracker",
)

# Theme stylesheets are written next to these partials.
RESERVED_THEMES = frozenset({"print", "variables"})

_OPTIONAL_TEXT_FIELDS = ("projectDescription", "authorName", "authorUrl") + GATED_FIELDS
_FLAG_FIELDS = ("additionalInfo", "banners", "addDistToVersionControl")

# Display names stored by configurations written before licenses had ids.
_LEGACY_LICENSES = {
    "Apache License, Version 2.0": License.APACHE.value,
    "GNU GPLv3": License.GPL.value,
    "All rights reserved": License.ALL_RIGHTS_RESERVED.value,
}


class TemplateContext(BaseModel):
    """Fully resolved variables every template is rendered against."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    projectName: str = Field(..., description="Project name as entered by the user.")
    name: str = Field(..., description="Slug of the project name.")
    title: str = Field(..., description="Title cased project name.")
    namespace: str = Field(..., description="Camel cased identifier derived from the slug.")
    projectDescription: str = Field("", description="Short description of the project.")
    projectType: ProjectType = Field(..., description="Static site or single page application.")
    theme: str = Field(..., description="Slug of the Bootstrap theme name.")
    authorName: str = Field("", description="Name of the author.")
    authorMail: str = Field("", description="Email address of the author.")
    authorUrl: str = Field("", description="Website of the author.")
    year: int = Field(..., description="Calendar year the project was generated in.")
    license: License = Field(..., description="License the project is published under.")
    initialVersion: str = Field(..., description="Semantic version for package.json.")
    additionalInfo: bool = Field(False, description="Whether repository metadata was collected.")
    projectHomepage: str = Field("", description="URL of the project homepage.")
    projectRepositoryType: str = Field("", description="Repository type, usually git.")
    projectRepository: str = Field("", description="Remote URL of the repository.")
    issueTracker: str = Field("", description="URL of the issue tracker.")
    banners: bool = Field(False, description="Prepend meta information banners to production files.")
    addDistToVersionControl: bool = Field(False, description="Keep the dist directory under version control.")
    boilerplateAmount: BoilerplateAmount = Field(..., description="Amount of example code to generate.")

    @model_validator(mode="after")
    def _check_derived_fields(self) -> "TemplateContext":
        slug = slugify(self.projectName)
        expected = {
            "name": slug,
            "title": titleize(self.projectName),
            "namespace": camelize(slug),
        }
        for field_name, value in expected.items():
            if getattr(self, field_name) != value:
                raise ValueError(f"{field_name} must be derived from projectName")
        if not self.theme or slugify(self.theme) != self.theme:
            raise ValueError("theme must be a non-empty slug")
        if self.theme in RESERVED_THEMES:
            raise ValueError(f"theme must not be one of {sorted(RESERVED_THEMES)}")
        return self

    def to_config(self) -> Dict[str, Any]:
        """Return the record persisted for replay. ``year`` is never stored."""

        return self.model_dump(mode="json", exclude={"year"})

    def template_variables(self) -> Dict[str, Any]:
        """Return the plain mapping exposed to the template renderer."""

        return self.model_dump(mode="json")


def current_year() -> int:
    """Return the calendar year used to stamp a freshly built context."""

    return date.today().year


def _require(raw: Mapping[str, Any], field_name: str) -> Any:
    value = raw.get(field_name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ConfigurationError(
            f"missing mandatory field '{field_name}'", field=field_name
        )
    return value


def build_context(
    raw: Mapping[str, Any],
    *,
    clock: Callable[[], int] = current_year,
) -> TemplateContext:
    """Derive a :class:`TemplateContext` from a raw answer record.

    Parameters
    ----------
    raw:
        Answers collected interactively or loaded from a persisted
        configuration. Keys for questions that were skipped may be absent.
    clock:
        Returns the year stamped into the context. Tests inject a fixed
        value to keep the result deterministic.

    Raises
    ------
    ConfigurationError
        When a mandatory field is missing, the project name or theme does not
        produce a slug or a value falls outside its allowed set.
    """

    for field_name in MANDATORY_FIELDS:
        _require(raw, field_name)

    project_name = str(raw["projectName"]).strip()
    slug = slugify(project_name)
    if not slug:
        raise ConfigurationError(
            "projectName must contain at least one letter or digit", field="projectName"
        )
    theme = slugify(str(raw.get("theme") or ""))
    if not theme:
        raise ConfigurationError("theme must contain at least one letter or digit", field="theme")
    if theme in RESERVED_THEMES:
        raise ConfigurationError(f"theme name '{theme}' is reserved", field="theme")

    license_value = str(raw["license"])
    license_value = _LEGACY_LICENSES.get(license_value, license_value)

    values: Dict[str, Any] = {
        "projectName": project_name,
        "name": slug,
        "title": titleize(project_name),
        "namespace": camelize(slug),
        "projectType": raw["projectType"],
        "theme": theme,
        "year": clock(),
        "license": license_value,
        "initialVersion": str(raw["initialVersion"]).strip(),
        "boilerplateAmount": raw["boilerplateAmount"],
    }
    for field_name in _OPTIONAL_TEXT_FIELDS:
        value = raw.get(field_name)
        values[field_name] = "" if value is None else str(value)
    for field_name in _FLAG_FIELDS:
        value = raw.get(field_name)
        values[field_name] = False if value is None else value
    if not values["additionalInfo"]:
        for field_name in GATED_FIELDS:
            values[field_name] = ""

    ignored = sorted(set(raw) - set(values))
    if ignored:
        LOGGER.debug("ignoring unknown answer keys: %s", ", ".join(ignored))

    try:
        context = TemplateContext(**values)
    except ValidationError as exc:
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or None
        raise ConfigurationError(
            f"invalid value for '{location}': {error['msg']}" if location else error["msg"],
            field=location,
        ) from exc

    LOGGER.debug("built context for project %r (%s)", context.name, context.projectType.value)
    return context
