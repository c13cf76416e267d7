"""Write the files of a manifest into a new project directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .context import TemplateContext
from .manifest import FileAction, resolve_manifest
from .template import TemplateRenderer, TemplateResolutionError

__all__ = ["DEFAULT_TEMPLATE_ROOT", "ProjectScaffolder"]

LOGGER = logging.getLogger(__name__)

DEFAULT_TEMPLATE_ROOT = Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True, slots=True)
class _FileWrite:
    source: Path
    destination: Path
    render: bool


@dataclass(slots=True)
class ProjectScaffolder:
    """Render or copy every :class:`FileAction` of a manifest.

    Templates are looked up below ``template_root``. All sources and
    destinations are checked before the first file is written; once writing
    has started a failure leaves the files written so far in place.
    """

    renderer: TemplateRenderer
    template_root: Path

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        template_root: str | Path | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.template_root = Path(template_root) if template_root else DEFAULT_TEMPLATE_ROOT

    def create(
        self,
        context: TemplateContext,
        target_dir: str | Path,
        *,
        force: bool = False,
    ) -> list[Path]:
        """Generate the project described by ``context`` inside ``target_dir``."""

        return self.write(resolve_manifest(context), context, target_dir, force=force)

    def write(
        self,
        manifest: Iterable[FileAction],
        context: TemplateContext,
        target_dir: str | Path,
        *,
        force: bool = False,
    ) -> list[Path]:
        """Execute ``manifest`` against ``context`` and return the written paths.

        Raises
        ------
        TemplateResolutionError
            When a source referenced by the manifest is missing. Nothing has
            been written at that point.
        FileExistsError
            When a destination already exists and ``force`` is not set.
        """

        target_path = Path(target_dir).expanduser().resolve()
        writes = [
            write
            for action in manifest
            for write in self._expand(action, target_path)
        ]

        if not force:
            for write in writes:
                if write.destination.exists():
                    raise FileExistsError(f"{write.destination} already exists")

        variables = context.template_variables()
        written: list[Path] = []
        for write in writes:
            write.destination.parent.mkdir(parents=True, exist_ok=True)
            if write.render:
                self.renderer.render_file(write.source, variables, target=write.destination)
            else:
                write.destination.write_bytes(write.source.read_bytes())
            LOGGER.debug(
                "%s %s -> %s",
                "rendered" if write.render else "copied",
                write.source.relative_to(self.template_root),
                write.destination,
            )
            written.append(write.destination)

        LOGGER.info("wrote %d files to %s", len(written), target_path)
        return written

    def _expand(self, action: FileAction, target_path: Path) -> list[_FileWrite]:
        source = self.template_root / action.source
        destination = target_path / action.destination

        if source.is_file():
            return [_FileWrite(source, destination, action.render)]
        if source.is_dir():
            return [
                _FileWrite(path, destination / path.relative_to(source), action.render)
                for path in sorted(source.rglob("*"))
                if path.is_file()
            ]
        raise TemplateResolutionError(action.source)
