"""
Security group builder.

Declares the compute-tier security group with its single ingress rule.
"""

from __future__ import annotations

from troposphere import Tags, ec2

from ..policy import IngressRule
from .base import ResourceBuilder


class SecurityGroupBuilder(ResourceBuilder):
    """Declare the security group shared by the load balancer and instances."""

    @property
    def ingress_rule(self) -> IngressRule:
        return IngressRule(cidr=self.spec.ingress_cidr)

    def build(self, vpc: str) -> ec2.SecurityGroup:
        rule = self.ingress_rule
        return self.graph.declare(
            ec2.SecurityGroup(
                self._logical_id("security-group"),
                GroupDescription=f"Inbound HTTP for {self.spec.name}",
                VpcId=vpc,
                SecurityGroupIngress=[
                    ec2.SecurityGroupRule(
                        IpProtocol=rule.protocol,
                        FromPort=rule.port,
                        ToPort=rule.port,
                        CidrIp=rule.cidr,
                    )
                ],
                Tags=Tags(Name=self._resource_name("sg")),
            )
        )


__all__ = ["SecurityGroupBuilder"]
