"""
Resource graph arena.

Wraps a troposphere Template. Each resource is declared exactly once and
later resources refer to earlier ones through Ref, GetAtt or DependsOn,
so declaration order is always a valid creation order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any, TypeVar

from troposphere import AWSObject, Output, Template

from .errors import DuplicateResourceError

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=AWSObject)


class ResourceGraph:
    """
    Arena of declared resources.

    Usage:
        graph = ResourceGraph("my stack")
        sg = graph.declare(ec2.SecurityGroup("Sg", ...))
        lb = graph.declare(elb.LoadBalancer("Lb", SecurityGroups=[Ref(sg)], ...))
    """

    def __init__(self, description: str | None = None):
        self.template = Template()
        if description:
            self.template.set_description(description)
        self._order: list[str] = []

    def declare(self, resource: R, depends_on: Iterable[AWSObject] = ()) -> R:
        """
        Declare a resource and return it as a handle.

        Args:
            resource: troposphere resource to add
            depends_on: Resources that must exist before this one even
                though no property references them

        Returns:
            The same resource, now owned by the graph

        Raises:
            DuplicateResourceError: If the logical id is already declared
        """
        if resource.title in self.template.resources:
            raise DuplicateResourceError(resource.title)

        dependencies = [dep.title for dep in depends_on]
        if dependencies:
            resource.DependsOn = dependencies

        self.template.add_resource(resource)
        self._order.append(resource.title)
        logger.debug("Declared %s %s", resource.resource_type, resource.title)
        return resource

    def add_output(self, output: Output) -> Output:
        """Add a stack output."""
        self.template.add_output(output)
        return output

    @property
    def order(self) -> list[str]:
        """Logical ids in declaration order."""
        return list(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, logical_id: object) -> bool:
        return logical_id in self.template.resources

    def __iter__(self) -> Iterator[AWSObject]:
        for title in self._order:
            yield self.template.resources[title]

    def get(self, logical_id: str) -> AWSObject:
        """Get a declared resource by logical id."""
        return self.template.resources[logical_id]

    def dependencies(self, logical_id: str) -> set[str]:
        """Get the logical ids a resource references or depends on."""
        data = self.get(logical_id).to_dict()
        found: set[str] = set()
        _collect_references(data.get("Properties", {}), found)

        depends_on = data.get("DependsOn", [])
        if isinstance(depends_on, str):
            depends_on = [depends_on]
        found.update(depends_on)

        return {ref for ref in found if ref in self.template.resources}

    def edges(self) -> list[tuple[str, str]]:
        """Get (dependency, dependent) pairs in declaration order."""
        return [
            (dependency, title)
            for title in self._order
            for dependency in sorted(self.dependencies(title))
        ]

    def to_dict(self) -> dict[str, Any]:
        return self.template.to_dict()

    def to_json(self) -> str:
        return self.template.to_json()

    def to_yaml(self) -> str:
        return self.template.to_yaml()


def _collect_references(value: Any, found: set[str]) -> None:
    """Walk a rendered property tree for Ref and Fn::GetAtt targets."""
    if isinstance(value, dict):
        if "Ref" in value and isinstance(value["Ref"], str):
            found.add(value["Ref"])
        get_att = value.get("Fn::GetAtt")
        if isinstance(get_att, list) and get_att:
            found.add(get_att[0])
        for item in value.values():
            _collect_references(item, found)
    elif isinstance(value, list):
        for item in value:
            _collect_references(item, found)


__all__ = ["ResourceGraph"]
