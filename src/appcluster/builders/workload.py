"""
Workload definition builder.

Declares the task definition and its single container definition.
"""

from __future__ import annotations

from troposphere import ecs

from ..config import AWSRegion
from ..policy import CONTAINER_PORT, LOG_DRIVER, resolve_memory
from .base import ResourceBuilder


class WorkloadBuilder(ResourceBuilder):
    """Declare the container and task definitions."""

    def build_container(
        self,
        image: str,
        memory: int | None,
        log_group: str,
        region: AWSRegion,
    ) -> ecs.ContainerDefinition:
        """Build the container definition (not a resource on its own)."""
        return ecs.ContainerDefinition(
            Name=self.names.container,
            Image=image,
            Memory=resolve_memory(memory),
            Essential=True,
            PortMappings=[ecs.PortMapping(ContainerPort=CONTAINER_PORT, HostPort=CONTAINER_PORT)],
            LogConfiguration=ecs.LogConfiguration(
                LogDriver=LOG_DRIVER,
                Options={
                    "awslogs-group": log_group,
                    "awslogs-region": region.value,
                },
            ),
        )

    def build(
        self,
        image: str,
        memory: int | None,
        log_group: str,
        region: AWSRegion,
    ) -> tuple[ecs.ContainerDefinition, ecs.TaskDefinition]:
        container = self.build_container(image, memory, log_group, region)
        task = self.graph.declare(
            ecs.TaskDefinition(
                self._logical_id("task"),
                Family=self.names.task,
                ContainerDefinitions=[container],
            )
        )
        return container, task


__all__ = ["WorkloadBuilder"]
