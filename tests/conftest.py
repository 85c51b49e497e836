"""Shared pytest fixtures for appcluster tests."""

import pytest

from appcluster.config import AppClusterSpec, AWSRegion, NetworkConfig
from appcluster.graph import ResourceGraph


@pytest.fixture
def network() -> NetworkConfig:
    """Return a network with two public and two private subnets."""
    return NetworkConfig(
        vpc="vpc-0abc",
        public_subnets=("subnet-pub-a", "subnet-pub-b"),
        private_subnets=("subnet-priv-a", "subnet-priv-b"),
    )


@pytest.fixture
def foo_spec(network: NetworkConfig) -> AppClusterSpec:
    """Return the minimal 'foo' spec."""
    return AppClusterSpec(
        name="foo",
        region=AWSRegion.US_EAST_1,
        network=network,
        container_image="img:1",
        container_memory=None,
        container_managed_policies=(),
        container_log_group_name="lg",
    )


@pytest.fixture
def graph() -> ResourceGraph:
    """Return an empty resource graph."""
    return ResourceGraph("test")

