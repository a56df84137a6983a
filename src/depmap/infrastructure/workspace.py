"""Workspace — the single dependency injected into every service.

Owns the three graph inputs for one invocation: the package inventory,
the resolution index, and the manifest store. Each is loaded lazily on
first access so ``--help`` and ``--version`` never touch the filesystem.
Loading failures propagate as :class:`~depmap.domain.errors.DepmapError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from depmap.domain.resolution import ResolutionIndex
from depmap.infrastructure.manifests import FileManifestStore, ManifestStore
from depmap.infrastructure.tables import load_inventory, load_resolutions

if TYPE_CHECKING:
    from pathlib import Path

    from depmap.config.settings import DepmapSettings
    from depmap.domain.records import PackageRecord


class Workspace:
    """Lazy access to the inputs of a graph build.

    Args:
        settings: Resolved settings (paths, duplicate policy, project root).
        manifests: Manifest store override; defaults to a
            :class:`FileManifestStore` using the configured manifest name.
        inventory_path: Override for the configured inventory path.
        resolutions_path: Override for the configured resolution table path.
    """

    def __init__(
        self,
        settings: DepmapSettings,
        *,
        manifests: ManifestStore | None = None,
        inventory_path: Path | None = None,
        resolutions_path: Path | None = None,
    ) -> None:
        self.settings = settings
        self.inventory_path = inventory_path or settings.inventory_path
        self.resolutions_path = resolutions_path or settings.resolutions_path
        self._manifests = manifests
        self._packages: list[PackageRecord] | None = None
        self._index: ResolutionIndex | None = None

    @property
    def root(self) -> Path:
        return self.settings.project_root

    @property
    def packages(self) -> list[PackageRecord]:
        """Inventory records in file order (loaded on first access)."""
        if self._packages is None:
            self._packages = load_inventory(
                self.inventory_path,
                project_root=self.settings.locality_prefix,
            )
        return self._packages

    @property
    def resolutions(self) -> ResolutionIndex:
        """Resolution index (loaded on first access)."""
        if self._index is None:
            self._index = ResolutionIndex(
                load_resolutions(self.resolutions_path),
                duplicates=self.settings.resolution.duplicates,
            )
        return self._index

    @property
    def manifests(self) -> ManifestStore:
        if self._manifests is None:
            self._manifests = FileManifestStore(self.settings.inputs.manifest_name)
        return self._manifests
