"""Scaffolding for front-end projects built with the baumeister toolchain.

The package turns a handful of answers about a new project into a template
context, resolves the files that context requires and renders them into the
target directory. It can be used programmatically or through the command line
interface.
"""

from __future__ import annotations

from .answers import InteractiveAnswerSource, QUESTIONS, ReplayAnswerSource
from .context import TemplateContext, build_context
from .errors import ConfigurationError
from .manifest import FileAction, resolve_manifest
from .naming import camelize, slugify, titleize
from .scaffold import ProjectScaffolder
from .template import TemplateRenderer, TemplateRenderingError, TemplateResolutionError

__all__ = [
    "ConfigurationError",
    "FileAction",
    "InteractiveAnswerSource",
    "ProjectScaffolder",
    "QUESTIONS",
    "ReplayAnswerSource",
    "TemplateContext",
    "TemplateRenderer",
    "TemplateRenderingError",
    "TemplateResolutionError",
    "build_context",
    "camelize",
    "resolve_manifest",
    "slugify",
    "titleize",
]

__version__ = "0.1.0"
