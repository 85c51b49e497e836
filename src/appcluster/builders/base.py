"""
Base class for resource builders.

Builders take the spec and the shared ResourceGraph and declare one
slice of the topology. Handles flow between builders as arguments.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..naming import DerivedNames, derive_name, logical_id

if TYPE_CHECKING:
    from ..config import AppClusterSpec
    from ..graph import ResourceGraph


class ResourceBuilder:
    """
    Base class for topology builders.

    Subclasses implement build() with whatever upstream handles they need.
    """

    def __init__(self, spec: AppClusterSpec, graph: ResourceGraph):
        self.spec = spec
        self.graph = graph
        self.names = DerivedNames.for_name(spec.name)

    def _logical_id(self, suffix: str) -> str:
        """Get the logical id for a derived resource."""
        return logical_id(self.spec.name, suffix)

    def _resource_name(self, suffix: str) -> str:
        """Get the physical name for a derived resource."""
        return derive_name(self.spec.name, suffix)


__all__ = ["ResourceBuilder"]
