"""
Spec validation.

Checks run before composition so that an invalid spec never produces a
partial resource graph.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Sequence
from dataclasses import dataclass

from .config import AppClusterSpec
from .errors import InvalidConfigurationError
from .naming import derive_name
from .policy import BASE_INSTANCE_POLICY_ARN, MAX_LOAD_BALANCER_NAME_LENGTH

_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]*$")


@dataclass(frozen=True)
class ConfigurationIssue:
    """A single problem found in a spec."""

    field: str
    reason: str

    def to_error(self) -> InvalidConfigurationError:
        return InvalidConfigurationError(self.field, self.reason)


def _duplicate_issues(field: str, values: Sequence[str]) -> list[ConfigurationIssue]:
    issues = []
    seen: set[str] = set()
    for value in values:
        if value in seen:
            issues.append(ConfigurationIssue(field, f"'{value}' is listed twice"))
        seen.add(value)
    return issues


def find_configuration_issues(spec: AppClusterSpec) -> list[ConfigurationIssue]:
    """
    Collect every configuration issue in a spec.

    Args:
        spec: Spec to check

    Returns:
        Issues in field order; empty if the spec is valid
    """
    issues: list[ConfigurationIssue] = []

    # Name
    if not spec.name:
        issues.append(ConfigurationIssue("name", "must not be empty"))
    elif not _NAME_RE.match(spec.name):
        issues.append(
            ConfigurationIssue("name", "must contain only letters, digits and hyphens")
        )
    elif len(derive_name(spec.name, "web")) > MAX_LOAD_BALANCER_NAME_LENGTH:
        issues.append(
            ConfigurationIssue(
                "name",
                f"load balancer name '{derive_name(spec.name, 'web')}' exceeds "
                f"{MAX_LOAD_BALANCER_NAME_LENGTH} characters",
            )
        )

    # Network
    if not spec.network.public_subnets:
        issues.append(ConfigurationIssue("network.public_subnets", "must not be empty"))
    issues.extend(_duplicate_issues("network.public_subnets", spec.network.public_subnets))
    if not spec.network.private_subnets:
        issues.append(ConfigurationIssue("network.private_subnets", "must not be empty"))
    issues.extend(_duplicate_issues("network.private_subnets", spec.network.private_subnets))

    try:
        ipaddress.ip_network(spec.ingress_cidr, strict=False)
    except ValueError:
        issues.append(
            ConfigurationIssue("ingress_cidr", f"'{spec.ingress_cidr}' is not a valid CIDR block")
        )

    # Workload
    if spec.container_memory is not None and spec.container_memory <= 0:
        issues.append(
            ConfigurationIssue(
                "container_memory", f"must be positive, got {spec.container_memory}"
            )
        )

    seen: set[str] = {BASE_INSTANCE_POLICY_ARN}
    for policy in spec.container_managed_policies:
        if policy == BASE_INSTANCE_POLICY_ARN:
            issues.append(
                ConfigurationIssue(
                    "container_managed_policies", f"'{policy}' is already the base policy"
                )
            )
        elif policy in seen:
            issues.append(
                ConfigurationIssue("container_managed_policies", f"'{policy}' is listed twice")
            )
        seen.add(policy)

    # Scaling
    scaling = spec.scaling
    if scaling.min_size <= 0:
        issues.append(
            ConfigurationIssue("scaling.min_size", f"must be positive, got {scaling.min_size}")
        )
    if scaling.max_size <= 0:
        issues.append(
            ConfigurationIssue("scaling.max_size", f"must be positive, got {scaling.max_size}")
        )
    if scaling.min_size > scaling.max_size:
        issues.append(
            ConfigurationIssue(
                "scaling.min_size",
                f"{scaling.min_size} is greater than max_size {scaling.max_size}",
            )
        )
    if scaling.cooldown < 0:
        issues.append(
            ConfigurationIssue("scaling.cooldown", f"must not be negative, got {scaling.cooldown}")
        )

    return issues


def validate_spec(spec: AppClusterSpec) -> None:
    """
    Raise for the first configuration issue in a spec.

    Raises:
        InvalidConfigurationError: If the spec has any issue
    """
    issues = find_configuration_issues(spec)
    if issues:
        raise issues[0].to_error()


__all__ = [
    "ConfigurationIssue",
    "find_configuration_issues",
    "validate_spec",
]
