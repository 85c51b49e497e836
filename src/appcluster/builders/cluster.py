"""
Cluster and service builders.

The cluster has no dependencies beyond its name. The service must be
declared after the cluster, task definition, service role and load
balancer it references.
"""

from __future__ import annotations

from dataclasses import dataclass

from troposphere import Ref, ecs, iam
from troposphere import elasticloadbalancing as elb

from ..policy import DEPLOYMENT_POLICY, DESIRED_TASK_COUNT
from .base import ResourceBuilder


@dataclass(frozen=True)
class ContainerPortBinding:
    """Which container port the load balancer routes to."""

    container_name: str
    container_port: int


class ClusterBuilder(ResourceBuilder):
    """Declare the ECS cluster."""

    def build(self) -> ecs.Cluster:
        return self.graph.declare(
            ecs.Cluster(
                self._logical_id("cluster"),
                ClusterName=self.names.cluster,
            )
        )


class ServiceBuilder(ResourceBuilder):
    """Declare the ECS service that keeps the task running behind the load balancer."""

    def build(
        self,
        cluster: ecs.Cluster,
        task_definition: ecs.TaskDefinition,
        service_role: iam.Role,
        load_balancer: elb.LoadBalancer,
        binding: ContainerPortBinding,
    ) -> ecs.Service:
        return self.graph.declare(
            ecs.Service(
                self._logical_id("service"),
                ServiceName=self.names.service,
                Cluster=Ref(cluster),
                TaskDefinition=Ref(task_definition),
                DesiredCount=DESIRED_TASK_COUNT,
                Role=Ref(service_role),
                LoadBalancers=[
                    ecs.LoadBalancer(
                        ContainerName=binding.container_name,
                        ContainerPort=binding.container_port,
                        LoadBalancerName=Ref(load_balancer),
                    )
                ],
                DeploymentConfiguration=ecs.DeploymentConfiguration(
                    MinimumHealthyPercent=DEPLOYMENT_POLICY.minimum_healthy_percent,
                    MaximumPercent=DEPLOYMENT_POLICY.maximum_percent,
                ),
            )
        )


__all__ = ["ContainerPortBinding", "ClusterBuilder", "ServiceBuilder"]
