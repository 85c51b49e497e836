"""
Load balancer builder.

Declares the internet-facing classic load balancer with a fixed HTTP
listener and TCP health check.
"""

from __future__ import annotations

from collections.abc import Sequence

from troposphere import Ref, ec2
from troposphere import elasticloadbalancing as elb

from ..policy import CONTAINER_PORT, HEALTH_CHECK_POLICY
from .base import ResourceBuilder


class LoadBalancerBuilder(ResourceBuilder):
    """Declare the public load balancer in front of the service."""

    def build(self, subnets: Sequence[str], security_group: ec2.SecurityGroup) -> elb.LoadBalancer:
        policy = HEALTH_CHECK_POLICY

        return self.graph.declare(
            elb.LoadBalancer(
                self._logical_id("web"),
                LoadBalancerName=self.names.load_balancer,
                Scheme="internet-facing",
                Subnets=list(subnets),
                SecurityGroups=[Ref(security_group)],
                Listeners=[
                    elb.Listener(
                        LoadBalancerPort=str(CONTAINER_PORT),
                        InstancePort=str(CONTAINER_PORT),
                        Protocol="HTTP",
                    )
                ],
                HealthCheck=elb.HealthCheck(
                    Target=policy.target,
                    Interval=str(policy.interval),
                    Timeout=str(policy.timeout),
                    HealthyThreshold=str(policy.healthy_threshold),
                    UnhealthyThreshold=str(policy.unhealthy_threshold),
                ),
            )
        )


__all__ = ["LoadBalancerBuilder"]
