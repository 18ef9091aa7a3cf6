"""High-level orchestration for building the documentation site.

:class:`SiteBuilder` runs the build as a sequence of full passes over the
document set:

discover → read → validate links → build navigation → render pages →
copy assets → process images → write search index → write index redirect.

When ``config.json`` declares versions, each archived snapshot under
``versionsDir`` is read, validated, and rendered into ``<outputDir>/<version>/``
after the current docs; assets, images, the search index, and the root
redirect are produced once from the current docs only.

Broken links and images are advisory: they are logged as warnings and returned
in the :class:`BuildResult`. Unreadable files and malformed front matter
propagate and abort the build.

Example
-------
>>> from pathlib import Path
>>> from docsmith.config import load_site_config
>>> from docsmith.generator import SiteBuilder
>>> config = load_site_config(Path("config.json"))  # doctest: +SKIP
>>> result = SiteBuilder(config).run()  # doctest: +SKIP
>>> len(result.pages)  # doctest: +SKIP
12
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import shutil
import typing as typ
from pathlib import Path

from docsmith._constants import (
    DOCS_OUTPUT_SUBDIR,
    HIGHLIGHT_CSS_FILENAME,
    INDEX_FILENAME,
    SEARCH_CONFIG_FILENAME,
    SEARCH_INDEX_FILENAME,
    STYLESHEET_FILENAME,
    THEME_SCRIPTS,
    VERSION_DIR_TEMPLATE,
    VERSION_SIDEBAR_TEMPLATE,
    VERSIONED_SIDEBARS_DIR,
)
from docsmith.generator.images import process_images
from docsmith.generator.link_validator import validate_internal_links
from docsmith.generator.models import BuildResult
from docsmith.generator.navigation import build_sidebar, sidebar_from_dicts
from docsmith.generator.page_generator import PageGenerator
from docsmith.generator.reader import discover_markdown_files, read_document
from docsmith.generator.renderer import HtmlContentRenderer
from docsmith.generator.search import build_search_index, write_json, write_search_index
from docsmith.git_metadata import GitCliHistory

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docsmith.config import SiteConfig
    from docsmith.generator.models import (
        BrokenImage,
        BrokenLink,
        Document,
        SidebarCategory,
    )
    from docsmith.git_metadata import GitHistory

logger = logging.getLogger(__name__)

THEME_DIR = Path(__file__).resolve().parents[1] / "theme"


@dc.dataclass(slots=True)
class VersionBuild:
    """Documents, sidebar, and pages produced for one docs tree."""

    documents: list[Document]
    sidebar: list[SidebarCategory]
    pages: list[Path]
    broken_links: list[BrokenLink]


class SiteBuilder:
    """Turn the configured docs tree into a static HTML site."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        history: GitHistory | None = None,
        renderer: HtmlContentRenderer | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : SiteConfig
            Resolved site configuration.
        history : GitHistory, optional
            Source of git metadata; defaults to querying ``git`` in the
            project root.
        renderer : HtmlContentRenderer, optional
            Markdown renderer; defaults to one using ``config.pygments_style``.
        templates_dir : Path, optional
            Override for the Jinja templates directory.
        """
        self.config = config
        self.history = history or GitCliHistory(config.root_dir)
        self.renderer = renderer or HtmlContentRenderer(config.pygments_style)
        self.templates_dir = templates_dir

    def run(self) -> BuildResult:
        """Build the whole site and return what was produced.

        Returns
        -------
        BuildResult
            Documents, written page paths, and advisory diagnostics. The result
            is empty when the docs directory holds no Markdown files.
        """
        output_dir = self.config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Building documentation site...")

        files = discover_markdown_files(self.config.docs_dir)
        if not files:
            logger.info("No markdown files found in %s", self.config.docs_dir)
            return BuildResult(output_dir=output_dir)

        current = self._build_tree(
            files,
            docs_dir=self.config.docs_dir,
            output_root=output_dir,
            generator=PageGenerator(self.config, templates_dir=self.templates_dir),
        )
        result = BuildResult(
            output_dir=output_dir,
            documents=current.documents,
            pages=list(current.pages),
            broken_links=list(current.broken_links),
        )
        for archived in self._build_archived_versions():
            result.pages.extend(archived.pages)
            result.broken_links.extend(archived.broken_links)
        _report_broken_links(result.broken_links)

        self.copy_assets(output_dir)
        logger.info("Processing images...")
        result.images = process_images(current.documents, self.config.docs_dir, output_dir)
        if result.images.copied:
            logger.info("Copied %d images", len(result.images.copied))
        _report_broken_images(result.images.broken)

        write_search_index(
            output_dir / SEARCH_INDEX_FILENAME, build_search_index(current.documents)
        )
        self._write_redirect(output_dir, current.sidebar, self.config.base_url, None)
        logger.info("Build complete! Output directory: %s", output_dir)
        return result

    def read_documents(self, files: cabc.Sequence[Path], docs_dir: Path) -> list[Document]:
        """Read and render every file; the first failure aborts the build."""
        return [
            read_document(path, docs_dir, renderer=self.renderer, history=self.history)
            for path in files
        ]

    def copy_assets(self, output_dir: Path) -> None:
        """Copy theme files, write ``highlight.css`` and ``search-config.json``."""
        for name in (STYLESHEET_FILENAME, *THEME_SCRIPTS):
            shutil.copyfile(self._theme_file(name), output_dir / name)
        (output_dir / HIGHLIGHT_CSS_FILENAME).write_text(
            self.renderer.stylesheet, encoding="utf-8"
        )
        write_json(output_dir / SEARCH_CONFIG_FILENAME, self.config.search_payload())

    def _theme_file(self, name: str) -> Path:
        """Return the project override for ``name`` or the packaged default."""
        if self.config.theme_dir is not None:
            candidate = self.config.theme_dir / name
            if candidate.is_file():
                return candidate
        return THEME_DIR / name

    def _build_tree(
        self,
        files: cabc.Sequence[Path],
        *,
        docs_dir: Path,
        output_root: Path,
        generator: PageGenerator,
        sidebar: list[SidebarCategory] | None = None,
    ) -> VersionBuild:
        """Read, validate, navigate, and render one docs tree."""
        documents = self.read_documents(files, docs_dir)

        logger.info("Validating internal links in %s...", docs_dir)
        broken_links: list[BrokenLink] = []
        for path in files:
            broken_links.extend(validate_internal_links(path, docs_dir, files))

        if sidebar is None:
            sidebar = build_sidebar(documents)
            logger.info("Generated sidebar from folder structure")

        docs_output = output_root / DOCS_OUTPUT_SUBDIR
        pages: list[Path] = []
        for document in documents:
            html = generator.render(document, documents, sidebar)
            target = docs_output / f"{document.slug}.html"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            pages.append(target)
        logger.info("Built %d pages", len(pages))
        return VersionBuild(
            documents=documents, sidebar=sidebar, pages=pages, broken_links=broken_links
        )

    def _build_archived_versions(self) -> list[VersionBuild]:
        """Render every archived version listed in ``versions.available``."""
        versions = self.config.versions
        if versions is None:
            return []
        builds: list[VersionBuild] = []
        for version in versions.available:
            docs_dir = self.config.resolved_versions_dir / VERSION_DIR_TEMPLATE.format(
                version=version
            )
            if not docs_dir.is_dir():
                logger.warning("Docs for version %s not found at %s; skipping", version, docs_dir)
                continue
            files = discover_markdown_files(docs_dir)
            if not files:
                logger.warning("No markdown files found for version %s", version)
                continue
            logger.info("Building version %s...", version)
            base_url = f"{self.config.base_url}{version}/"
            output_root = self.config.output_dir / version
            build = self._build_tree(
                files,
                docs_dir=docs_dir,
                output_root=output_root,
                generator=PageGenerator(
                    self.config,
                    templates_dir=self.templates_dir,
                    docs_base_url=base_url,
                    version_label=version,
                ),
                sidebar=self._load_version_sidebar(version),
            )
            self._write_redirect(output_root, build.sidebar, base_url, version)
            builds.append(build)
        return builds

    def _load_version_sidebar(self, version: str) -> list[SidebarCategory] | None:
        """Return the archived sidebar for ``version`` or None to derive one."""
        path = (
            self.config.root_dir
            / VERSIONED_SIDEBARS_DIR
            / VERSION_SIDEBAR_TEMPLATE.format(version=version)
        )
        if not path.is_file():
            logger.warning(
                "Sidebar for version %s not found at %s; deriving it from files",
                version,
                path,
            )
            return None
        return sidebar_from_dicts(json.loads(path.read_text(encoding="utf-8")))

    def _write_redirect(
        self,
        output_root: Path,
        sidebar: cabc.Sequence[SidebarCategory],
        base_url: str,
        version: str | None,
    ) -> None:
        """Write ``index.html`` forwarding to the first sidebar document."""
        first = next((category.items[0] for category in sidebar if category.items), None)
        if first is None:
            return
        generator = PageGenerator(
            self.config,
            templates_dir=self.templates_dir,
            docs_base_url=base_url,
            version_label=version,
        )
        (output_root / INDEX_FILENAME).write_text(
            generator.render_redirect(first), encoding="utf-8"
        )


def _report_broken_links(broken_links: cabc.Sequence[BrokenLink]) -> None:
    if not broken_links:
        logger.info("All internal links are valid")
        return
    logger.warning("Found broken internal links:")
    for broken in broken_links:
        logger.warning('  - %s: "%s" -> %s', broken.file, broken.text, broken.link)
    logger.warning("Total broken links: %d", len(broken_links))


def _report_broken_images(broken_images: cabc.Sequence[BrokenImage]) -> None:
    if not broken_images:
        return
    logger.warning("Broken image references found:")
    for broken in broken_images:
        logger.warning("  - %s: %s", broken.file, broken.image)
    logger.warning("Total broken images: %d", len(broken_images))


__all__ = ["THEME_DIR", "SiteBuilder", "VersionBuild"]
