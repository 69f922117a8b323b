"""Site builder — writes pages, index and static assets for a source tree."""

from mdsite.site.builder import BuildReport, SiteBuildError, SiteBuilder, write_static_assets

__all__ = ["BuildReport", "SiteBuildError", "SiteBuilder", "write_static_assets"]
