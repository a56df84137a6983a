"""BaseService — abstract foundation for all depmap services.

Every service receives a :class:`Workspace` at construction time. The
Workspace provides lazy access to the inventory, resolution index and
manifest store. Services catch :class:`DepmapError` at their boundary and
return ``ok=False`` results; nothing else is caught.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depmap.infrastructure.workspace import Workspace


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class GraphService(BaseService):
            def build(self) -> ServiceResult:
                packages = self._workspace.packages
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace
