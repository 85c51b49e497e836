"""
Fixed platform policy.

Values here are not caller-configurable: health-check thresholds,
deployment bounds, trust principals and the managed policies every
cluster needs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .config import AWSRegion

# Managed policies
BASE_INSTANCE_POLICY_ARN = (
    "arn:aws:iam::aws:policy/service-role/AmazonEC2ContainerServiceforEC2Role"
)
SERVICE_ROLE_POLICY_ARN = "arn:aws:iam::aws:policy/service-role/AmazonEC2ContainerServiceRole"

# Trust principals
ECS_SERVICE_PRINCIPAL = "ecs.amazonaws.com"
EC2_SERVICE_PRINCIPAL = "ec2.amazonaws.com"

# Workload
DEFAULT_CONTAINER_MEMORY = 256  # MiB
CONTAINER_PORT = 80
LOG_DRIVER = "awslogs"
DESIRED_TASK_COUNT = 1

# Compute
ECS_OPTIMIZED_IMAGE_PARAMETER = "/aws/service/ecs/optimized-ami/amazon-linux-2/recommended/image_id"
INSTANCE_HEALTH_CHECK_TYPE = "EC2"

# Load balancer names are capped by ELB
MAX_LOAD_BALANCER_NAME_LENGTH = 32


@dataclass(frozen=True)
class IngressRule:
    """A single inbound allow rule."""

    protocol: str = "tcp"
    port: int = 80
    cidr: str = "0.0.0.0/0"


@dataclass(frozen=True)
class HealthCheckPolicy:
    """Load balancer health probe."""

    protocol: str = "TCP"
    port: int = 80
    interval: int = 15
    timeout: int = 3
    unhealthy_threshold: int = 3
    healthy_threshold: int = 3

    @property
    def target(self) -> str:
        """Get the ELB health check target (e.g. 'TCP:80')."""
        return f"{self.protocol}:{self.port}"


@dataclass(frozen=True)
class DeploymentPolicy:
    """Healthy-capacity bounds the ECS scheduler keeps during updates."""

    minimum_healthy_percent: int = 60
    maximum_percent: int = 150


HEALTH_CHECK_POLICY = HealthCheckPolicy()
DEPLOYMENT_POLICY = DeploymentPolicy()


def resolve_memory(memory: int | None) -> int:
    """Resolve the container memory limit, defaulting to 256 MiB."""
    return DEFAULT_CONTAINER_MEMORY if memory is None else memory


def resolve_image_id(region: AWSRegion, overrides: Mapping[AWSRegion, str] | None = None) -> str:
    """
    Resolve the machine image for container instances in a region.

    An explicit per-region image wins. Otherwise CloudFormation resolves
    the recommended ECS-optimized image from the public SSM parameter at
    deploy time, which keeps the template valid in every region.

    Args:
        region: Target region
        overrides: Optional region -> image id pins

    Returns:
        An image id or a CloudFormation dynamic reference
    """
    if overrides and region in overrides:
        return overrides[region]
    return f"{{{{resolve:ssm:{ECS_OPTIMIZED_IMAGE_PARAMETER}}}}}"


def trust_policy(principal: str) -> dict:
    """Build an assume-role policy document trusting one service principal."""
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"Service": [principal]},
                "Action": ["sts:AssumeRole"],
            }
        ],
    }


def instance_policy_arns(extra_policies: tuple[str, ...] | list[str]) -> list[str]:
    """Get the instance role policies: the base policy first, then the caller's in order."""
    return [BASE_INSTANCE_POLICY_ARN, *extra_policies]
