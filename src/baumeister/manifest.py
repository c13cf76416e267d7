"""Decision table mapping a template context to the files of a new project."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .context import BoilerplateAmount, License, ProjectType, TemplateContext

__all__ = ["FileAction", "LICENSE_SOURCES", "RULES", "Rule", "resolve_manifest"]


@dataclass(frozen=True, slots=True)
class FileAction:
    """A template or asset bound to a destination path.

    ``source`` is relative to the template root and may name a directory.
    ``destination`` is relative to the output directory. When ``render`` is
    false the source is copied byte for byte.
    """

    source: str
    destination: str
    render: bool = False

    def bind(self, context: TemplateContext) -> "FileAction":
        return FileAction(
            source=self.source,
            destination=self.destination.replace("{theme}", context.theme),
            render=self.render,
        )


@dataclass(frozen=True, slots=True)
class Rule:
    """Actions emitted whenever ``condition`` holds for a context."""

    name: str
    condition: Callable[[TemplateContext], bool]
    actions: tuple[FileAction, ...]


def _copy(source: str, destination: str | None = None) -> FileAction:
    return FileAction(source, destination or source, render=False)


def _render(source: str, destination: str) -> FileAction:
    return FileAction(source, destination, render=True)


def _always(context: TemplateContext) -> bool:
    return True


def _static_site(context: TemplateContext) -> bool:
    return context.projectType is ProjectType.STATIC_SITE


def _spa(context: TemplateContext) -> bool:
    return context.projectType is ProjectType.SPA


def _little(context: TemplateContext) -> bool:
    return context.boilerplateAmount is BoilerplateAmount.LITTLE


def _static_site_with(amount: BoilerplateAmount) -> Callable[[TemplateContext], bool]:
    def condition(context: TemplateContext) -> bool:
        return _static_site(context) and context.boilerplateAmount is amount

    return condition


def _licensed(license_: License) -> Callable[[TemplateContext], bool]:
    def condition(context: TemplateContext) -> bool:
        return context.license is license_

    return condition


LICENSE_SOURCES = {
    License.MIT: "_LICENSE-MIT",
    License.APACHE: "_LICENSE-APACHE-2.0",
    License.GPL: "_LICENSE-GNU",
    License.ALL_RIGHTS_RESERVED: "_LICENSE-ALL-RIGHTS-RESERVED",
}

_BASE_FILES = (
    # Package manager and tests
    _render("_package.json", "package.json"),
    _copy("src/app/__tests__"),
    # Build process
    _copy("build/config.js"),
    _copy("build/handlebars.js"),
    _copy("build/webpack.config.babel.js"),
    _render("build/webpack/_config.dev-server.js", "build/webpack/config.dev-server.js"),
    _copy("build/webpack/config.entry.js"),
    _copy("build/webpack/config.module.rules.js"),
    _copy("build/webpack/config.optimization.js"),
    _copy("build/webpack/config.output.js"),
    _copy("build/webpack/config.plugins.js"),
    _copy("build/webpack/config.stats.js"),
    _copy("build/webpack/helpers.js"),
    # Dotfiles
    _copy("babelrc", ".babelrc"),
    _render("src/app/_babelrc", "src/app/.babelrc"),
    _copy("travis.yml", ".travis.yml"),
    _copy("editorconfig", ".editorconfig"),
    _render("_eslintrc.json", ".eslintrc.json"),
    _copy("stylelintrc.json", ".stylelintrc.json"),
    _copy("gitattributes", ".gitattributes"),
    _render("_gitignore", ".gitignore"),
    # Project meta files
    _render("_README.md", "README.md"),
    _copy("CONTRIBUTING.md"),
    _copy("CHANGELOG.md"),
    _render("_CODE_OF_CONDUCT.md", "CODE_OF_CONDUCT.md"),
    _copy("humans.txt"),
    # Config files
    _render("_baumeister.json", "baumeister.json"),
    _copy("postcss.config.js"),
    # Assets, application entry and base styles
    _copy("src/assets/fonts"),
    _copy("src/assets/img"),
    _copy("src/app/base"),
    _render("src/app/_index.js", "src/app/index.js"),
    _render("src/assets/scss/_index.scss", "src/assets/scss/index.scss"),
    _copy("src/assets/scss/_print.scss"),
    _render("src/assets/scss/_theme.scss", "src/assets/scss/_{theme}.scss"),
)

RULES: tuple[Rule, ...] = (
    Rule("base", _always, _BASE_FILES),
    Rule(
        "static site",
        _static_site,
        (
            _render("src/handlebars/layouts/_default.hbs", "src/handlebars/layouts/default.hbs"),
            _copy("src/handlebars/helpers/add-year.js"),
        ),
    ),
    Rule("single page application", _spa, (_render("src/_index.html", "src/index.html"),)),
    Rule(
        "static site with a little boilerplate",
        _static_site_with(BoilerplateAmount.LITTLE),
        (
            _copy("src/handlebars/partials/footer.hbs"),
            _copy("src/handlebars/partials/navbar.hbs"),
            _copy("src/index-little-boilerplate.hbs", "src/index.hbs"),
            _copy("src/demoElements.hbs"),
            _copy("src/stickyFooter.hbs"),
        ),
    ),
    Rule(
        "static site with minimum boilerplate",
        _static_site_with(BoilerplateAmount.MINIMUM),
        (
            _copy("src/handlebars/partials/gitkeep", "src/handlebars/partials/.gitkeep"),
            _copy("src/index-no-boilerplate.hbs", "src/index.hbs"),
        ),
    ),
    *(
        Rule(f"{license_.value} license", _licensed(license_), (_render(source, "LICENSE"),))
        for license_, source in LICENSE_SOURCES.items()
    ),
    Rule(
        "theme partials",
        _little,
        (
            _render("src/assets/scss/_theme/_alerts.scss", "src/assets/scss/{theme}/_alerts.scss"),
            _render("src/assets/scss/_theme/_footer.scss", "src/assets/scss/{theme}/_footer.scss"),
            _copy("src/assets/scss/_theme/_mixins.scss", "src/assets/scss/{theme}/_mixins.scss"),
            _copy("src/assets/scss/_theme/_scaffolding.scss", "src/assets/scss/{theme}/_scaffolding.scss"),
        ),
    ),
    Rule(
        "theme helpers",
        _always,
        (
            _copy(
                "src/assets/scss/_theme/_testResponsiveHelpers.scss",
                "src/assets/scss/{theme}/_testResponsiveHelpers.scss",
            ),
            _copy("src/assets/scss/_variables.scss"),
        ),
    ),
)


def resolve_manifest(
    context: TemplateContext, rules: tuple[Rule, ...] = RULES
) -> tuple[FileAction, ...]:
    """Return every file action required for ``context`` in rule order."""

    return tuple(
        action.bind(context)
        for rule in rules
        if rule.condition(context)
        for action in rule.actions
    )
