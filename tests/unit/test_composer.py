"""Tests for the top-level composer."""

from unittest.mock import patch

import pytest

from appcluster.composer import AppCluster, AppClusterComposer, compose
from appcluster.config import NetworkConfig
from appcluster.errors import InvalidConfigurationError
from appcluster.policy import BASE_INSTANCE_POLICY_ARN

P1 = "arn:aws:iam::123456789012:policy/P1"
P2 = "arn:aws:iam::123456789012:policy/P2"


def _resources(app_cluster: AppCluster) -> dict:
    return app_cluster.graph.to_dict()["Resources"]


def _by_type(app_cluster: AppCluster, resource_type: str) -> list[dict]:
    return [r for r in _resources(app_cluster).values() if r["Type"] == resource_type]


class TestEndToEnd:
    """End-to-end composition scenarios."""

    def test_foo_cluster(self, foo_spec):
        """Test the minimal spec composes to the documented topology."""
        app_cluster = compose(foo_spec)

        assert app_cluster.cluster.ClusterName == "foo-cluster"
        assert len(app_cluster.services) == 1
        assert app_cluster.services[0].ServiceName == "foo-service"
        assert app_cluster.asg.AutoScalingGroupName == "foo-asg"
        assert app_cluster.asg.MinSize == "2"
        assert app_cluster.asg.MaxSize == "2"

        (task,) = _by_type(app_cluster, "AWS::ECS::TaskDefinition")
        assert task["Properties"]["ContainerDefinitions"][0]["Memory"] == 256

        instance_role = _resources(app_cluster)["FooInstanceRole"]
        assert instance_role["Properties"]["ManagedPolicyArns"] == [BASE_INSTANCE_POLICY_ARN]

    def test_caller_policies_follow_base_policy(self, foo_spec):
        spec = foo_spec.model_copy(update={"container_managed_policies": (P1, P2)})

        app_cluster = compose(spec)

        instance_role = _resources(app_cluster)["FooInstanceRole"]
        assert instance_role["Properties"]["ManagedPolicyArns"] == [
            BASE_INSTANCE_POLICY_ARN,
            P1,
            P2,
        ]

    def test_explicit_memory(self, foo_spec):
        app_cluster = compose(foo_spec.model_copy(update={"container_memory": 768}))

        (task,) = _by_type(app_cluster, "AWS::ECS::TaskDefinition")
        assert task["Properties"]["ContainerDefinitions"][0]["Memory"] == 768

    def test_every_resource_kind_declared_once(self, foo_spec):
        app_cluster = compose(foo_spec)

        types = sorted(r["Type"] for r in _resources(app_cluster).values())
        assert types == sorted(
            [
                "AWS::EC2::SecurityGroup",
                "AWS::ElasticLoadBalancing::LoadBalancer",
                "AWS::ECS::TaskDefinition",
                "AWS::ECS::Cluster",
                "AWS::IAM::Role",
                "AWS::IAM::Role",
                "AWS::ECS::Service",
                "AWS::IAM::InstanceProfile",
                "AWS::AutoScaling::LaunchConfiguration",
                "AWS::AutoScaling::AutoScalingGroup",
            ]
        )

    def test_placement(self, foo_spec):
        """Test the load balancer uses public subnets and the group private ones."""
        app_cluster = compose(foo_spec)

        (lb,) = _by_type(app_cluster, "AWS::ElasticLoadBalancing::LoadBalancer")
        (asg,) = _by_type(app_cluster, "AWS::AutoScaling::AutoScalingGroup")
        assert lb["Properties"]["Subnets"] == ["subnet-pub-a", "subnet-pub-b"]
        assert asg["Properties"]["VPCZoneIdentifier"] == ["subnet-priv-a", "subnet-priv-b"]

    def test_log_configuration_uses_region(self, foo_spec):
        app_cluster = compose(foo_spec)

        (task,) = _by_type(app_cluster, "AWS::ECS::TaskDefinition")
        options = task["Properties"]["ContainerDefinitions"][0]["LogConfiguration"]["Options"]
        assert options == {"awslogs-group": "lg", "awslogs-region": "us-east-1"}

    def test_outputs(self, foo_spec):
        outputs = compose(foo_spec).graph.to_dict()["Outputs"]

        assert outputs["ClusterName"]["Value"] == {"Ref": "FooCluster"}
        assert outputs["ServiceName"]["Value"] == {"Fn::GetAtt": ["FooService", "Name"]}
        assert outputs["AutoScalingGroupName"]["Value"] == {"Ref": "FooAsg"}
        assert outputs["LoadBalancerDNSName"]["Value"] == {"Fn::GetAtt": ["FooWeb", "DNSName"]}


class TestDerivedNames:
    """Tests for deterministic naming across the composed graph."""

    def test_physical_names(self, foo_spec):
        names = {row["name"] for row in compose(foo_spec).resources() if row["name"]}

        assert {
            "foo-cluster",
            "foo-task",
            "foo-service",
            "foo-asg",
            "foo-service-role",
            "foo-instance-role",
            "foo-web",
        } <= names

    def test_composition_is_deterministic(self, foo_spec):
        """Test composing twice yields identical templates."""
        assert compose(foo_spec).to_json() == compose(foo_spec).to_json()


class TestDependencyOrder:
    """Tests for declaration order and reference edges."""

    def test_declaration_order(self, foo_spec):
        assert compose(foo_spec).graph.order == [
            "FooSecurityGroup",
            "FooWeb",
            "FooTask",
            "FooCluster",
            "FooServiceRole",
            "FooInstanceRole",
            "FooService",
            "FooInstanceProfile",
            "FooLaunchConfig",
            "FooAsg",
        ]

    def test_edges_point_backwards(self, foo_spec):
        """Test every reference targets an earlier declaration."""
        graph = compose(foo_spec).graph
        position = {title: index for index, title in enumerate(graph.order)}

        for dependency, dependent in graph.edges():
            assert position[dependency] < position[dependent]

    def test_expected_edges(self, foo_spec):
        graph = compose(foo_spec).graph

        assert graph.dependencies("FooWeb") == {"FooSecurityGroup"}
        assert graph.dependencies("FooService") == {
            "FooCluster",
            "FooTask",
            "FooServiceRole",
            "FooWeb",
        }
        assert graph.dependencies("FooInstanceProfile") == {"FooInstanceRole"}
        assert graph.dependencies("FooLaunchConfig") == {
            "FooSecurityGroup",
            "FooInstanceProfile",
            "FooCluster",
        }
        assert graph.dependencies("FooAsg") == {"FooLaunchConfig"}


class TestInvalidSpecs:
    """Tests for failure before any declaration."""

    def test_empty_subnets_raise(self, foo_spec):
        spec = foo_spec.model_copy(update={"network": NetworkConfig(vpc="vpc-1")})

        with pytest.raises(InvalidConfigurationError) as exc_info:
            compose(spec)

        assert exc_info.value.field == "network.public_subnets"

    def test_no_graph_built_on_invalid_spec(self, foo_spec):
        spec = foo_spec.model_copy(update={"container_memory": 0})

        with patch("appcluster.composer.ResourceGraph") as graph_cls:
            with pytest.raises(InvalidConfigurationError):
                AppClusterComposer(spec).run()

        graph_cls.assert_not_called()


class TestSummary:
    """Tests for AppCluster reporting helpers."""

    def test_summary(self, foo_spec):
        assert compose(foo_spec).summary() == {
            "cluster": "foo-cluster",
            "services": ["foo-service"],
            "asg": "foo-asg",
            "resources": 10,
        }

    def test_resources_rows(self, foo_spec):
        rows = compose(foo_spec).resources()

        assert rows[0] == {
            "logical_id": "FooSecurityGroup",
            "type": "AWS::EC2::SecurityGroup",
            "name": None,
            "depends_on": [],
        }
        assert rows[-1]["depends_on"] == ["FooLaunchConfig"]
