"""Placeholder substitution for the generator templates."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, MutableMapping

from .errors import BaumeisterError
from .naming import camelize, slugify, titleize

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
    "TemplateResolutionError",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")


class TemplateRenderingError(BaumeisterError):
    """Raised when the renderer cannot evaluate a placeholder."""


class TemplateResolutionError(TemplateRenderingError):
    """Raised when a template referenced by the manifest does not exist."""

    def __init__(self, template: str | Path) -> None:
        super().__init__(f"template '{template}' does not exist")
        self.template = str(template)


def _resolve_value(context: Mapping[str, Any], dotted_path: str) -> Any:
    value: Any = context
    for segment in dotted_path.split("."):
        if not isinstance(value, Mapping) or segment not in value:
            raise KeyError(segment)
        value = value[segment]
    return value


@dataclass(slots=True)
class TemplateRenderer:
    """Render templates with ``{{ placeholder|filters }}`` expressions.

    Placeholders that do not resolve against the context are left untouched by
    default, so Handlebars expressions meant for the generated project's own
    build survive rendering.
    """

    filters: MutableMapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.filters:
            self.filters.update(
                {
                    "upper": lambda value: str(value).upper(),
                    "lower": lambda value: str(value).lower(),
                    "title": lambda value: titleize(str(value)),
                    "slug": lambda value: slugify(str(value)),
                    "camel": lambda value: camelize(str(value)),
                    "strip": lambda value: str(value).strip(),
                    "json": lambda value: json.dumps(value, ensure_ascii=False),
                    "repr": lambda value: repr(value),
                }
            )

    def render_string(
        self,
        template: str,
        context: Mapping[str, Any],
        *,
        missing: str = "keep",
    ) -> str:
        """Render ``template`` using ``context``.

        Parameters
        ----------
        template:
            The template string to evaluate.
        context:
            Mapping providing values for placeholders.
        missing:
            ``"keep"`` returns unresolved placeholders unchanged, ``"empty"``
            replaces them with an empty string and ``"error"`` raises
            :class:`TemplateRenderingError`.
        """

        if missing not in {"keep", "empty", "error"}:
            raise ValueError("missing must be 'keep', 'empty', or 'error'")

        def substitute(match: re.Match[str]) -> str:
            expression = match.group("expression")
            parts = [part.strip() for part in expression.split("|") if part.strip()]
            if not parts:
                return match.group(0)

            key, *filter_names = parts
            try:
                value = _resolve_value(context, key)
            except KeyError:
                if missing == "keep":
                    return match.group(0)
                if missing == "empty":
                    return ""
                raise TemplateRenderingError(f"missing value for '{key}'")

            for filter_name in filter_names:
                try:
                    filter_func = self.filters[filter_name]
                except KeyError as exc:
                    raise TemplateRenderingError(f"unknown filter '{filter_name}'") from exc
                value = filter_func(value)

            if isinstance(value, bool):
                return "true" if value else "false"
            return str(value)

        return _PLACEHOLDER_PATTERN.sub(substitute, template)

    def render_file(
        self,
        template_path: str | Path,
        context: Mapping[str, Any],
        *,
        target: str | Path | None = None,
        encoding: str = "utf-8",
        missing: str = "keep",
    ) -> str:
        """Render ``template_path`` and optionally write the result to ``target``."""

        template_path = Path(template_path)
        if not template_path.is_file():
            raise TemplateResolutionError(template_path)

        text = template_path.read_text(encoding=encoding)
        rendered = self.render_string(text, context, missing=missing)

        if target is not None:
            target_path = Path(target)
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(rendered, encoding=encoding)

        return rendered
