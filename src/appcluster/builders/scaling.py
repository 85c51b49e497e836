"""
Compute scaling builder.

Declares the instance profile, the launch configuration and the
autoscaling group that provide EC2 capacity to the cluster. Instances
register themselves into the cluster at boot through the bootstrap
script, so the launch configuration depends on the cluster.

No load balancer is attached to the group; load balancer health is
handled by the ECS service.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from troposphere import Base64, Ref, autoscaling, ec2, ecs, iam

from ..bootstrap import ecs_bootstrap_script
from ..policy import INSTANCE_HEALTH_CHECK_TYPE, resolve_image_id
from .base import ResourceBuilder

logger = logging.getLogger(__name__)


class ScalingBuilder(ResourceBuilder):
    """Declare the EC2 capacity behind the cluster."""

    def build_instance_profile(self, instance_role: iam.Role) -> iam.InstanceProfile:
        return self.graph.declare(
            iam.InstanceProfile(
                self._logical_id("instance-profile"),
                InstanceProfileName=self.names.instance_profile,
                Roles=[Ref(instance_role)],
            )
        )

    def build_launch_configuration(
        self,
        security_group: ec2.SecurityGroup,
        instance_profile: iam.InstanceProfile,
        cluster: ecs.Cluster,
    ) -> autoscaling.LaunchConfiguration:
        image_id = resolve_image_id(self.spec.region, self.spec.image_ids)
        script = ecs_bootstrap_script(cluster.ClusterName)

        return self.graph.declare(
            autoscaling.LaunchConfiguration(
                self._logical_id("launch-config"),
                ImageId=image_id,
                InstanceType=self.spec.instance_type,
                SecurityGroups=[Ref(security_group)],
                IamInstanceProfile=Ref(instance_profile),
                UserData=Base64(script),
            ),
            depends_on=[cluster],
        )

    def build_group(
        self,
        launch_configuration: autoscaling.LaunchConfiguration,
        subnets: Sequence[str],
    ) -> autoscaling.AutoScalingGroup:
        scaling = self.spec.scaling
        if scaling.is_fixed:
            logger.warning(
                "Autoscaling group %s is fixed at %d instances and will not scale",
                self.names.asg,
                scaling.min_size,
            )

        return self.graph.declare(
            autoscaling.AutoScalingGroup(
                self._logical_id("asg"),
                AutoScalingGroupName=self.names.asg,
                LaunchConfigurationName=Ref(launch_configuration),
                VPCZoneIdentifier=list(subnets),
                MinSize=str(scaling.min_size),
                MaxSize=str(scaling.max_size),
                Cooldown=str(scaling.cooldown),
                HealthCheckType=INSTANCE_HEALTH_CHECK_TYPE,
            )
        )

    def build(
        self,
        security_group: ec2.SecurityGroup,
        instance_role: iam.Role,
        cluster: ecs.Cluster,
        subnets: Sequence[str],
    ) -> autoscaling.AutoScalingGroup:
        instance_profile = self.build_instance_profile(instance_role)
        launch_configuration = self.build_launch_configuration(
            security_group, instance_profile, cluster
        )
        return self.build_group(launch_configuration, subnets)


__all__ = ["ScalingBuilder"]
