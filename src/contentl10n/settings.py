"""Per-site localization settings.

Each site names the content node that roots its translation hierarchy.
Settings are resolved on every load and never cached, so a changed start
page takes effect on the next reload.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from contentl10n.diagnostics import ContentNotFoundError
from contentl10n.enums import NodeKind

if TYPE_CHECKING:
    from contentl10n.content.accessor import ContentTreeAccessor
    from contentl10n.content.model import ContentNode
    from contentl10n.types import ContentId, SiteId

__all__ = [
    "LocalizationSettings",
    "SettingsResolver",
    "SiteDefinition",
    "StartPageSettingsResolver",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SiteDefinition:
    """A site served by the deployment.

    Attributes:
        site_id: Unique site identifier
        name: Human-readable site name
        start_page: Content id of the site's start page
    """

    site_id: SiteId
    name: str
    start_page: ContentId


@dataclass(frozen=True, slots=True)
class LocalizationSettings:
    """Localization settings of one site.

    Attributes:
        site_id: Site the settings belong to
        settings_content_id: Node holding the settings
        translations_root: Root of the translation hierarchy, if configured
    """

    site_id: SiteId
    settings_content_id: ContentId
    translations_root: ContentId | None


class SettingsResolver(Protocol):
    """Protocol for resolving localization settings per site."""

    def get_default_site_settings(self) -> LocalizationSettings | None:
        """Settings of the current (default) site, or None."""
        ...

    def get_settings_by_id(self, site_id: SiteId) -> LocalizationSettings | None:
        """Settings of a specific site, or None if unknown or unset."""
        ...

    def get_translation_root(self, site_id: SiteId | None = None) -> ContentNode | None:
        """Translation root node of a site (default site when None)."""
        ...


class StartPageSettingsResolver:
    """Resolve settings from each site's start page.

    A site has localization settings when its start page is a settings
    holder; the translation root is the node its translations_root field
    points at.

    Example:
        >>> sites = [SiteDefinition("main", "Main site", start_page=1)]
        >>> resolver = StartPageSettingsResolver(tree, sites, default_site_id="main")
        >>> resolver.get_translation_root().name
        'Translations'
    """

    __slots__ = ("_accessor", "_default_site_id", "_sites")

    def __init__(
        self,
        accessor: ContentTreeAccessor,
        sites: Iterable[SiteDefinition] | Mapping[SiteId, SiteDefinition],
        *,
        default_site_id: SiteId | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            accessor: Content store to load start pages from
            sites: Site definitions (iterable or mapping keyed by site id)
            default_site_id: Site used by get_default_site_settings();
                defaults to the first site

        Raises:
            ValueError: If default_site_id names an unknown site
        """
        if isinstance(sites, Mapping):
            site_list = list(sites.values())
        else:
            site_list = list(sites)
        self._accessor = accessor
        self._sites: dict[SiteId, SiteDefinition] = {site.site_id: site for site in site_list}
        if default_site_id is not None and default_site_id not in self._sites:
            msg = f"Unknown default site '{default_site_id}'"
            raise ValueError(msg)
        self._default_site_id = default_site_id if default_site_id is not None else (
            site_list[0].site_id if site_list else None
        )

    @property
    def default_site_id(self) -> SiteId | None:
        """Site used when no site id is given."""
        return self._default_site_id

    def get_default_site_settings(self) -> LocalizationSettings | None:
        """Settings of the default site, or None."""
        if self._default_site_id is None:
            return None
        return self.get_settings_by_id(self._default_site_id)

    def get_settings_by_id(self, site_id: SiteId) -> LocalizationSettings | None:
        """Settings of a site, or None when the start page holds no settings.

        Raises:
            TransientStoreError: If the content store cannot be read
        """
        site = self._sites.get(site_id)
        if site is None:
            logger.debug("No site definition for '%s'", site_id)
            return None
        try:
            start_page = self._accessor.get(site.start_page)
        except ContentNotFoundError:
            logger.warning("Start page %s of site '%s' not found", site.start_page, site_id)
            return None
        if start_page.kind is not NodeKind.SETTINGS:
            return None
        return LocalizationSettings(
            site_id=site_id,
            settings_content_id=start_page.content_id,
            translations_root=start_page.translations_root,
        )

    def get_translation_root(self, site_id: SiteId | None = None) -> ContentNode | None:
        """Translation root node of a site, or None if not configured.

        Raises:
            TransientStoreError: If the content store cannot be read
        """
        settings = (
            self.get_settings_by_id(site_id)
            if site_id is not None
            else self.get_default_site_settings()
        )
        if settings is None or settings.translations_root is None:
            return None
        try:
            return self._accessor.get(settings.translations_root)
        except ContentNotFoundError:
            logger.warning(
                "Translation root %s of site '%s' not found",
                settings.translations_root,
                settings.site_id,
            )
            return None
