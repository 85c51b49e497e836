"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from appcluster.cli import app

CONFIG = """
[cluster]
name = "foo"
region = "us-east-1"
container_image = "img:1"
container_log_group_name = "lg"

[cluster.network]
vpc = "vpc-123"
public_subnets = ["subnet-a"]
private_subnets = ["subnet-b"]
"""


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a valid cluster config."""
    path = tmp_path / "appcluster.toml"
    path.write_text(CONFIG)
    return path


class TestSynth:
    """Tests for the synth command."""

    def test_prints_json_template(self, cli_runner, config_file):
        result = cli_runner.invoke(app, ["synth", "--config", str(config_file)])

        assert result.exit_code == 0
        template = json.loads(result.stdout)
        assert template["Resources"]["FooCluster"]["Properties"]["ClusterName"] == "foo-cluster"

    def test_prints_yaml_template(self, cli_runner, config_file):
        result = cli_runner.invoke(app, ["synth", "-c", str(config_file), "--format", "yaml"])

        assert result.exit_code == 0
        assert "AWS::ECS::Cluster" in result.stdout
        assert not result.stdout.lstrip().startswith("{")

    def test_writes_output_file(self, cli_runner, config_file, tmp_path):
        output = tmp_path / "out" / "stack.json"

        result = cli_runner.invoke(
            app, ["synth", "-c", str(config_file), "--output", str(output)]
        )

        assert result.exit_code == 0
        assert output.exists()
        assert "FooAsg" in json.loads(output.read_text())["Resources"]

    def test_missing_config_fails(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["synth", "-c", str(tmp_path / "missing.toml")])

        assert result.exit_code == 1

    def test_invalid_spec_fails(self, cli_runner, tmp_path):
        path = tmp_path / "appcluster.toml"
        path.write_text(CONFIG.replace('public_subnets = ["subnet-a"]', "public_subnets = []"))

        result = cli_runner.invoke(app, ["synth", "-c", str(path)])

        assert result.exit_code == 1
        assert "public_subnets" in result.output


class TestPlan:
    """Tests for the plan command."""

    def test_lists_resources(self, cli_runner, config_file):
        result = cli_runner.invoke(app, ["plan", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Cluster Plan" in result.output
        assert "Resources" in result.output
        assert "will not scale" in result.output


class TestCheck:
    """Tests for the check command."""

    def test_valid_config(self, cli_runner, config_file):
        result = cli_runner.invoke(app, ["check", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "valid" in result.output

    def test_reports_every_issue(self, cli_runner, tmp_path):
        path = tmp_path / "appcluster.toml"
        path.write_text(
            CONFIG.replace('container_log_group_name = "lg"', 'container_log_group_name = "lg"\ncontainer_memory = 0')
            .replace('private_subnets = ["subnet-b"]', "private_subnets = []")
        )

        result = cli_runner.invoke(app, ["check", "-c", str(path)])

        assert result.exit_code == 1
        assert "container_memory" in result.output
        assert "private_subnets" in result.output


class TestVersion:
    """Tests for --version."""

    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "appcluster" in result.output
