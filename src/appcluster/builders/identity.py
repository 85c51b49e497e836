"""
Identity builder.

Declares the ECS service role and the container instance role. The two
roles trust disjoint principals. The instance role always carries the
base ECS instance policy first, followed by the caller's policies in
their original order.
"""

from __future__ import annotations

from collections.abc import Sequence

from troposphere import iam

from ..policy import (
    EC2_SERVICE_PRINCIPAL,
    ECS_SERVICE_PRINCIPAL,
    SERVICE_ROLE_POLICY_ARN,
    instance_policy_arns,
    trust_policy,
)
from .base import ResourceBuilder


class IdentityBuilder(ResourceBuilder):
    """Declare the service role and instance role."""

    def build_service_role(self) -> iam.Role:
        return self.graph.declare(
            iam.Role(
                self._logical_id("service-role"),
                RoleName=self.names.service_role,
                AssumeRolePolicyDocument=trust_policy(ECS_SERVICE_PRINCIPAL),
                ManagedPolicyArns=[SERVICE_ROLE_POLICY_ARN],
            )
        )

    def build_instance_role(self, extra_policies: Sequence[str]) -> iam.Role:
        # Policy references are forwarded as given
        return self.graph.declare(
            iam.Role(
                self._logical_id("instance-role"),
                RoleName=self.names.instance_role,
                AssumeRolePolicyDocument=trust_policy(EC2_SERVICE_PRINCIPAL),
                ManagedPolicyArns=instance_policy_arns(list(extra_policies)),
            )
        )

    def build(self, extra_policies: Sequence[str]) -> tuple[iam.Role, iam.Role]:
        service_role = self.build_service_role()
        instance_role = self.build_instance_role(extra_policies)
        return service_role, instance_role


__all__ = ["IdentityBuilder"]
