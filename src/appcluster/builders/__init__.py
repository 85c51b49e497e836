"""
Resource builders.

Each module declares one slice of the cluster topology:
- security: compute-tier security group
- load_balancer: public load balancer and health check
- workload: container and task definitions
- identity: service role and instance role
- cluster: ECS cluster and service
- scaling: instance profile, launch configuration, autoscaling group
"""

from .base import ResourceBuilder
from .cluster import ClusterBuilder, ContainerPortBinding, ServiceBuilder
from .identity import IdentityBuilder
from .load_balancer import LoadBalancerBuilder
from .scaling import ScalingBuilder
from .security import SecurityGroupBuilder
from .workload import WorkloadBuilder

__all__ = [
    "ResourceBuilder",
    "SecurityGroupBuilder",
    "LoadBalancerBuilder",
    "WorkloadBuilder",
    "IdentityBuilder",
    "ClusterBuilder",
    "ServiceBuilder",
    "ContainerPortBinding",
    "ScalingBuilder",
]
