"""
Top-level composer.

AppClusterComposer validates an AppClusterSpec and runs the builders in
dependency order, threading each builder's handles into the next:

    security group -> load balancer -> workload -> cluster
        -> identity -> service -> compute scaling

Composition is pure. The same spec always yields the same template.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from troposphere import GetAtt, Output, Ref, Template, autoscaling, ecs

from .builders import (
    ClusterBuilder,
    ContainerPortBinding,
    IdentityBuilder,
    LoadBalancerBuilder,
    ScalingBuilder,
    SecurityGroupBuilder,
    ServiceBuilder,
    WorkloadBuilder,
)
from .config import AppClusterSpec
from .graph import ResourceGraph
from .policy import CONTAINER_PORT
from .validation import validate_spec

logger = logging.getLogger(__name__)


# =============================================================================
# Composition Result
# =============================================================================


@dataclass(frozen=True)
class AppCluster:
    """
    Composed cluster topology.

    Only the cluster, its services and the autoscaling group are exposed
    directly; every other resource is reachable through the graph.
    """

    cluster: ecs.Cluster
    services: tuple[ecs.Service, ...]
    asg: autoscaling.AutoScalingGroup
    graph: ResourceGraph

    def to_template(self) -> Template:
        return self.graph.template

    def to_json(self) -> str:
        return self.graph.to_json()

    def to_yaml(self) -> str:
        return self.graph.to_yaml()

    def resources(self) -> list[dict[str, Any]]:
        """Describe each declared resource in declaration order."""
        rows = []
        for resource in self.graph:
            rows.append(
                {
                    "logical_id": resource.title,
                    "type": resource.resource_type,
                    "name": _physical_name(resource),
                    "depends_on": sorted(self.graph.dependencies(resource.title)),
                }
            )
        return rows

    def summary(self) -> dict[str, Any]:
        """Get a summary of the composed cluster."""
        return {
            "cluster": self.cluster.ClusterName,
            "services": [service.ServiceName for service in self.services],
            "asg": self.asg.AutoScalingGroupName,
            "resources": len(self.graph),
        }


_NAME_PROPERTIES = (
    "ClusterName",
    "ServiceName",
    "Family",
    "RoleName",
    "InstanceProfileName",
    "LoadBalancerName",
    "AutoScalingGroupName",
)


def _physical_name(resource: Any) -> str | None:
    for prop in _NAME_PROPERTIES:
        if prop in resource.properties:
            return resource.properties[prop]
    return None


# =============================================================================
# Composer
# =============================================================================


class AppClusterComposer:
    """
    Composes the resource topology for an AppClusterSpec.

    Usage:
        composer = AppClusterComposer(spec)
        app_cluster = composer.run()
        print(app_cluster.to_yaml())
    """

    def __init__(self, spec: AppClusterSpec):
        self.spec = spec

    def run(self) -> AppCluster:
        """
        Compose the cluster.

        Returns:
            AppCluster with every resource declared

        Raises:
            InvalidConfigurationError: If the spec is invalid. Raised before
                any resource is declared.
        """
        spec = self.spec
        validate_spec(spec)

        logger.info("Composing cluster %s in %s", spec.name, spec.region.value)
        graph = ResourceGraph(f"ECS cluster {spec.name}")

        security_group = SecurityGroupBuilder(spec, graph).build(spec.network.vpc)

        load_balancer = LoadBalancerBuilder(spec, graph).build(
            spec.network.public_subnets, security_group
        )

        container, task_definition = WorkloadBuilder(spec, graph).build(
            spec.container_image,
            spec.container_memory,
            spec.container_log_group_name,
            spec.region,
        )

        cluster = ClusterBuilder(spec, graph).build()

        service_role, instance_role = IdentityBuilder(spec, graph).build(
            spec.container_managed_policies
        )

        service = ServiceBuilder(spec, graph).build(
            cluster,
            task_definition,
            service_role,
            load_balancer,
            ContainerPortBinding(container_name=container.Name, container_port=CONTAINER_PORT),
        )

        asg = ScalingBuilder(spec, graph).build(
            security_group, instance_role, cluster, spec.network.private_subnets
        )

        graph.add_output(Output("ClusterName", Value=Ref(cluster)))
        graph.add_output(Output("ServiceName", Value=GetAtt(service, "Name")))
        graph.add_output(Output("AutoScalingGroupName", Value=Ref(asg)))
        graph.add_output(Output("LoadBalancerDNSName", Value=GetAtt(load_balancer, "DNSName")))

        logger.info("Composed cluster %s with %d resources", spec.name, len(graph))
        return AppCluster(cluster=cluster, services=(service,), asg=asg, graph=graph)


def compose(spec: AppClusterSpec) -> AppCluster:
    """Compose the resource topology for a spec."""
    return AppClusterComposer(spec).run()


__all__ = [
    "AppCluster",
    "AppClusterComposer",
    "compose",
]
