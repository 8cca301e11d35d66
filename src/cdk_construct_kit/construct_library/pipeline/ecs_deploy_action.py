"""
ECS Deploy Action for CodePipeline
Maintainers: Eric Wilson
MIT License.  See Project Root for the license information.
"""

import re
from typing import Any, Dict, List, Optional

from aws_cdk import aws_codepipeline as codepipeline
from aws_cdk import aws_codepipeline_actions as codepipeline_actions
from aws_cdk import aws_ecs as ecs
from aws_cdk import aws_iam as iam
from aws_lambda_powertools import Logger
from constructs import Construct

logger = Logger(service="EcsDeployAction")

# permissions based on the CodePipeline documentation:
# https://docs.aws.amazon.com/codepipeline/latest/userguide/how-to-custom-role.html#how-to-update-role-new-services
ECS_DEPLOY_ACTIONS = [
    "ecs:DescribeServices",
    "ecs:DescribeTaskDefinition",
    "ecs:DescribeTasks",
    "ecs:ListTasks",
    "ecs:RegisterTaskDefinition",
    "ecs:UpdateService",
]

PASS_ROLE_SERVICES = [
    "ec2.amazonaws.com",
    "ecs-tasks.amazonaws.com",
]

_ACTION_NAME_PATTERN = re.compile(r"^[A-Za-z0-9.@_-]{1,100}$")


def deploy_artifact_bounds() -> codepipeline.ActionArtifactBounds:
    """Deploy actions take exactly one input artifact and produce none"""
    return codepipeline.ActionArtifactBounds(
        min_inputs=1, max_inputs=1, min_outputs=0, max_outputs=0
    )


def determine_input_artifact(
    input: Optional[codepipeline.Artifact],
    image_file: Optional[codepipeline.ArtifactPath],
) -> codepipeline.Artifact:
    """
    Resolve the single input artifact of the action.

    Raises:
        ValueError: If both or neither of ``input`` / ``image_file`` are given
    """
    if image_file is not None and input is not None:
        raise ValueError(
            "Exactly one of 'input' or 'imageFile' can be provided in the ECS deploy Action"
        )
    if image_file is not None:
        return image_file.artifact
    if input is not None:
        return input
    raise ValueError(
        "Specifying one of 'input' or 'imageFile' is required for the ECS deploy Action"
    )


def _bind_option(options: Any, name: str) -> Any:
    if options is None:
        return None
    if isinstance(options, dict):
        return options.get(name)
    return getattr(options, name, None)


class EcsDeployAction(codepipeline_actions.Action):
    """
    CodePipeline action to deploy an ECS service.

    The image definitions file is either the default ``imagedefinitions.json``
    at the root of ``input``, or the file named by ``image_file``.  The target is
    either an ECS ``service`` or an explicit ``cluster_name`` / ``service_name``.
    """

    def __init__(
        self,
        *,
        action_name: str,
        input: Optional[codepipeline.Artifact] = None,
        image_file: Optional[codepipeline.ArtifactPath] = None,
        service: Optional[ecs.IBaseService] = None,
        cluster_name: Optional[str] = None,
        service_name: Optional[str] = None,
        run_order: Optional[int] = None,
        role: Optional[iam.IRole] = None,
    ) -> None:
        if not action_name or not _ACTION_NAME_PATTERN.match(action_name):
            raise ValueError(
                f"Invalid action name '{action_name}'. Action names must be 1-100 characters "
                "of letters, digits, '.', '@', '-' or '_'"
            )

        if service is not None and (cluster_name or service_name):
            raise ValueError(
                "Provide either 'service' or 'cluster_name' and 'service_name' to the ECS deploy Action, not both"
            )
        if service is None and not (cluster_name and service_name):
            raise ValueError(
                "The ECS deploy Action requires a 'service', or both 'cluster_name' and 'service_name'"
            )

        input_artifact = determine_input_artifact(input, image_file)

        super().__init__(
            action_name=action_name,
            category=codepipeline.ActionCategory.DEPLOY,
            provider="ECS",
            artifact_bounds=deploy_artifact_bounds(),
            inputs=[input_artifact],
            resource=service,
            run_order=run_order,
            role=role,
        )

        self.input_artifact = input_artifact
        self.image_file = image_file
        self.service = service
        self._cluster_name = cluster_name
        self._service_name = service_name

    @property
    def configuration(self) -> Dict[str, Any]:
        """The CodePipeline configuration block of the ECS deploy provider"""
        configuration: Dict[str, Any] = {}
        if self.service is not None:
            configuration["ClusterName"] = self.service.cluster.cluster_name
            configuration["ServiceName"] = self.service.service_name
        else:
            configuration["ClusterName"] = self._cluster_name
            configuration["ServiceName"] = self._service_name
        if self.image_file is not None:
            configuration["FileName"] = self.image_file.file_name
        return configuration

    def policy_statements(self) -> List[iam.PolicyStatement]:
        """The statements the action role needs to run this action"""
        return [
            iam.PolicyStatement(actions=list(ECS_DEPLOY_ACTIONS), resources=["*"]),
            iam.PolicyStatement(
                actions=["iam:PassRole"],
                resources=["*"],
                conditions={
                    "StringEqualsIfExists": {
                        "iam:PassedToService": list(PASS_ROLE_SERVICES),
                    }
                },
            ),
        ]

    def _bound(
        self,
        scope: Construct,
        stage: codepipeline.IStage,
        options: Optional[codepipeline.ActionBindOptions] = None,
        *,
        bucket=None,
        role=None,
    ) -> codepipeline.ActionConfig:
        """
        Called by the pipeline when the action is added to a stage.

        Grants the ECS and PassRole statements to the action role and read
        access on the pipeline artifact bucket.
        """
        role = role if role is not None else _bind_option(options, "role")
        bucket = bucket if bucket is not None else _bind_option(options, "bucket")

        for statement in self.policy_statements():
            role.add_to_principal_policy(statement)

        if bucket is not None:
            bucket.grant_read(role)

        logger.info(f"Bound ECS deploy action {self.action_properties.action_name}")
        return codepipeline.ActionConfig(configuration=self.configuration)
