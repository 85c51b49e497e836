"""
Cluster specification models for appcluster.

A spec is built in code or loaded from the [cluster] table of a TOML file.
"""

from __future__ import annotations

import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from .errors import InvalidConfigurationError


class AWSRegion(str, Enum):
    """Supported AWS regions."""

    US_EAST_1 = "us-east-1"
    US_EAST_2 = "us-east-2"
    US_WEST_1 = "us-west-1"
    US_WEST_2 = "us-west-2"
    EU_WEST_1 = "eu-west-1"
    EU_WEST_2 = "eu-west-2"
    EU_CENTRAL_1 = "eu-central-1"
    AP_SOUTHEAST_1 = "ap-southeast-1"
    AP_SOUTHEAST_2 = "ap-southeast-2"
    AP_NORTHEAST_1 = "ap-northeast-1"


# =============================================================================
# Sub-configuration Models
# =============================================================================


class NetworkConfig(BaseModel):
    """Existing VPC and subnets the cluster is placed into."""

    model_config = ConfigDict(frozen=True)

    vpc: str
    public_subnets: tuple[str, ...] = ()
    private_subnets: tuple[str, ...] = ()


class ScalingConfig(BaseModel):
    """Autoscaling group bounds."""

    model_config = ConfigDict(frozen=True)

    min_size: int = 2
    max_size: int = 2
    cooldown: int = 300

    @property
    def is_fixed(self) -> bool:
        """Check if the group is pinned to a single size."""
        return self.min_size == self.max_size


# =============================================================================
# Main Specification Model
# =============================================================================


class AppClusterSpec(BaseModel):
    """Complete input for composing an application cluster."""

    model_config = ConfigDict(frozen=True)

    name: str
    region: AWSRegion = AWSRegion.US_EAST_1
    network: NetworkConfig
    container_image: str
    container_memory: StrictInt | None = None
    container_managed_policies: tuple[str, ...] = ()
    container_log_group_name: str

    scaling: ScalingConfig = Field(default_factory=ScalingConfig)
    ingress_cidr: str = "0.0.0.0/0"
    instance_type: str = "t2.micro"
    image_ids: dict[AWSRegion, str] = Field(default_factory=dict)


# =============================================================================
# Configuration Loading
# =============================================================================


def load_cluster_spec(toml_path: Path) -> AppClusterSpec:
    """
    Load a cluster specification from a TOML file.

    Args:
        toml_path: Path to a TOML file with a [cluster] table

    Returns:
        AppClusterSpec built from the [cluster] table

    Raises:
        InvalidConfigurationError: If the file is missing, unreadable,
            or the table does not describe a valid spec
    """
    if not toml_path.exists():
        raise InvalidConfigurationError("config", f"{toml_path} does not exist")

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise InvalidConfigurationError("config", f"{toml_path} is not valid TOML: {e}") from e

    cluster_section = data.get("cluster")
    if not cluster_section:
        raise InvalidConfigurationError("cluster", f"no [cluster] table in {toml_path}")

    return parse_cluster_spec(cluster_section)


def parse_cluster_spec(data: dict[str, Any]) -> AppClusterSpec:
    """Parse a config dict into an AppClusterSpec."""
    try:
        return AppClusterSpec.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "cluster"
        raise InvalidConfigurationError(field, error["msg"]) from e


__all__ = [
    "AWSRegion",
    "NetworkConfig",
    "ScalingConfig",
    "AppClusterSpec",
    "load_cluster_spec",
    "parse_cluster_spec",
]
