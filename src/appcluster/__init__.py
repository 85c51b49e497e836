"""
appcluster - ECS application cluster topology composer.

Composes, from a small AppClusterSpec, the AWS resources needed to run a
containerized web application behind a load balancer on EC2 capacity:
- Security group, classic load balancer
- ECS task definition, cluster, service
- IAM service role, instance role, instance profile
- Launch configuration, autoscaling group

Usage:
    from appcluster import AppClusterSpec, NetworkConfig, compose

    app_cluster = compose(spec)
    print(app_cluster.to_yaml())
"""

from ._version import get_version
from .composer import AppCluster, AppClusterComposer, compose
from .config import AppClusterSpec, AWSRegion, NetworkConfig, ScalingConfig, load_cluster_spec
from .errors import (
    AppClusterError,
    BootstrapRenderError,
    DuplicateResourceError,
    InvalidConfigurationError,
)
from .graph import ResourceGraph

__version__ = get_version()

__all__ = [
    "__version__",
    # Configuration
    "AppClusterSpec",
    "AWSRegion",
    "NetworkConfig",
    "ScalingConfig",
    "load_cluster_spec",
    # Composition
    "AppCluster",
    "AppClusterComposer",
    "compose",
    "ResourceGraph",
    # Errors
    "AppClusterError",
    "InvalidConfigurationError",
    "DuplicateResourceError",
    "BootstrapRenderError",
]
