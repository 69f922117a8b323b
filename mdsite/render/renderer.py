"""PageRenderer — wraps converted HTML bodies in the site's Jinja2 templates."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from mdsite.config.models import SiteConfig

if TYPE_CHECKING:
    from mdsite.index.builder import IndexSection


class PageRenderer:
    """Renders document pages and the index page. Holds no per-page state."""

    def __init__(self, config: SiteConfig | None = None) -> None:
        self.config = config or SiteConfig()
        self.env = Environment(
            loader=PackageLoader("mdsite.render", "templates"),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
        )

    def _common(self) -> dict[str, str]:
        return {
            "footer": self.config.site.footer,
            "static_prefix": self.config.output.static_dir.strip("/"),
        }

    def render_page(self, title: str, body: str) -> str:
        """Full HTML page for one document. *body* is trusted, already-rendered HTML."""
        template = self.env.get_template("page.html")
        return template.render(
            title=title,
            body=Markup(body),
            home_label=self.config.site.home_label,
            prism_script_url=self.config.highlighter.script_url,
            prism_autoloader_url=self.config.highlighter.autoloader_url,
            prism_local=self.config.highlighter.local_script is not None,
            **self._common(),
        )

    def render_index(self, sections: Sequence[IndexSection]) -> str:
        template = self.env.get_template("index.html")
        return template.render(
            title=self.config.site.title,
            sections=sections,
            **self._common(),
        )
