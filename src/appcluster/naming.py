"""
Deterministic resource naming.

Every physical name and logical id is a pure function of the cluster
name, so re-running the composer always yields the same identities.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_WORD_RE = re.compile(r"[A-Za-z0-9]+")


def derive_name(name: str, suffix: str) -> str:
    """Get the physical name '<name>-<suffix>'."""
    return f"{name}-{suffix}"


def logical_id(name: str, suffix: str) -> str:
    """
    Get a CloudFormation logical id for a derived resource.

    Logical ids must be alphanumeric, so 'my-app' + 'instance-role'
    becomes 'MyAppInstanceRole'.
    """
    words = _WORD_RE.findall(name) + _WORD_RE.findall(suffix)
    return "".join(word[:1].upper() + word[1:] for word in words)


@dataclass(frozen=True)
class DerivedNames:
    """Physical names of every named resource in a cluster."""

    cluster: str
    task: str
    service: str
    asg: str
    service_role: str
    instance_role: str
    instance_profile: str
    container: str
    load_balancer: str

    @classmethod
    def for_name(cls, name: str) -> DerivedNames:
        return cls(
            cluster=derive_name(name, "cluster"),
            task=derive_name(name, "task"),
            service=derive_name(name, "service"),
            asg=derive_name(name, "asg"),
            service_role=derive_name(name, "service-role"),
            instance_role=derive_name(name, "instance-role"),
            instance_profile=derive_name(name, "instance-profile"),
            container=derive_name(name, "container"),
            load_balancer=derive_name(name, "web"),
        )
