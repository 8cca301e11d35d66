"""
Unit tests for the ECS deploy pipeline action
"""

import pytest
import aws_cdk as cdk
from aws_cdk import App
from aws_cdk import aws_codepipeline as codepipeline
from aws_cdk import aws_codepipeline_actions as codepipeline_actions
from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_ecs as ecs
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from aws_cdk.assertions import Match, Template

from cdk_construct_kit.construct_library.pipeline import EcsDeployAction
from cdk_construct_kit.construct_library.pipeline.ecs_deploy_action import (
    ECS_DEPLOY_ACTIONS,
    PASS_ROLE_SERVICES,
)


@pytest.fixture
def stack():
    return cdk.Stack(App(), "PipelineStack")


@pytest.fixture
def build_output():
    return codepipeline.Artifact("BuildOutput")


@pytest.fixture
def service(stack):
    vpc = ec2.Vpc(stack, "Vpc")
    cluster = ecs.Cluster.from_cluster_attributes(
        stack, "Cluster", cluster_name="web", vpc=vpc, security_groups=[]
    )
    return ecs.FargateService.from_fargate_service_attributes(
        stack, "Service", cluster=cluster, service_name="api"
    )


def build_pipeline(stack, deploy_action, source_output):
    source_bucket = s3.Bucket(stack, "SourceBucket", versioned=True)
    return codepipeline.Pipeline(
        stack,
        "Pipeline",
        stages=[
            codepipeline.StageProps(
                stage_name="Source",
                actions=[
                    codepipeline_actions.S3SourceAction(
                        action_name="Source",
                        bucket=source_bucket,
                        bucket_key="app.zip",
                        output=source_output,
                    )
                ],
            ),
            codepipeline.StageProps(stage_name="Deploy", actions=[deploy_action]),
        ],
    )


def test_requires_input_or_image_file():
    with pytest.raises(ValueError, match="Specifying one of 'input' or 'imageFile' is required"):
        EcsDeployAction(action_name="Deploy", cluster_name="c", service_name="s")


def test_rejects_both_input_and_image_file(build_output):
    with pytest.raises(ValueError, match="Exactly one of 'input' or 'imageFile'"):
        EcsDeployAction(
            action_name="Deploy",
            input=build_output,
            image_file=build_output.at_path("images.json"),
            cluster_name="c",
            service_name="s",
        )


def test_requires_a_target_service(build_output):
    with pytest.raises(ValueError, match="requires a 'service'"):
        EcsDeployAction(action_name="Deploy", input=build_output, cluster_name="c")


def test_rejects_service_with_explicit_names(build_output, service):
    with pytest.raises(ValueError, match="not both"):
        EcsDeployAction(
            action_name="Deploy", input=build_output, service=service, service_name="s"
        )


def test_rejects_invalid_action_name(build_output):
    with pytest.raises(ValueError, match="Invalid action name"):
        EcsDeployAction(
            action_name="Deploy to prod!", input=build_output, cluster_name="c", service_name="s"
        )


def test_action_properties(build_output):
    action = EcsDeployAction(
        action_name="Deploy", input=build_output, cluster_name="web", service_name="api", run_order=2
    )

    properties = action.action_properties
    assert properties.action_name == "Deploy"
    assert properties.category == codepipeline.ActionCategory.DEPLOY
    assert properties.provider == "ECS"
    assert properties.run_order == 2
    assert [a.artifact_name for a in properties.inputs] == ["BuildOutput"]
    bounds = properties.artifact_bounds
    assert (bounds.min_inputs, bounds.max_inputs) == (1, 1)
    assert (bounds.min_outputs, bounds.max_outputs) == (0, 0)


def test_configuration_from_names(build_output):
    action = EcsDeployAction(
        action_name="Deploy", input=build_output, cluster_name="web", service_name="api"
    )

    assert action.configuration == {"ClusterName": "web", "ServiceName": "api"}


def test_configuration_from_service_and_image_file(build_output, service):
    action = EcsDeployAction(
        action_name="Deploy",
        image_file=build_output.at_path("images.json"),
        service=service,
    )

    assert action.configuration == {
        "ClusterName": "web",
        "ServiceName": "api",
        "FileName": "images.json",
    }


def test_deploy_stage_in_pipeline(stack, build_output):
    action = EcsDeployAction(
        action_name="Deploy",
        image_file=build_output.at_path("images.json"),
        cluster_name="web",
        service_name="api",
    )
    build_pipeline(stack, action, build_output)
    template = Template.from_stack(stack)

    template.has_resource_properties(
        "AWS::CodePipeline::Pipeline",
        {
            "Stages": Match.array_with(
                [
                    Match.object_like(
                        {
                            "Name": "Deploy",
                            "Actions": [
                                Match.object_like(
                                    {
                                        "ActionTypeId": {
                                            "Category": "Deploy",
                                            "Owner": "AWS",
                                            "Provider": "ECS",
                                            "Version": "1",
                                        },
                                        "Configuration": {
                                            "ClusterName": "web",
                                            "ServiceName": "api",
                                            "FileName": "images.json",
                                        },
                                        "InputArtifacts": [{"Name": "BuildOutput"}],
                                    }
                                )
                            ],
                        }
                    )
                ]
            )
        },
    )


def test_deploy_stage_grants_ecs_pass_role_and_artifact_read(stack, build_output):
    action = EcsDeployAction(
        action_name="Deploy", input=build_output, cluster_name="web", service_name="api"
    )
    build_pipeline(stack, action, build_output)
    template = Template.from_stack(stack)

    template.has_resource_properties(
        "AWS::IAM::Policy",
        {
            "PolicyDocument": {
                "Statement": Match.array_with(
                    [
                        Match.object_like(
                            {
                                "Action": Match.array_with(ECS_DEPLOY_ACTIONS),
                                "Effect": "Allow",
                                "Resource": "*",
                            }
                        ),
                        Match.object_like(
                            {
                                "Action": "iam:PassRole",
                                "Condition": {
                                    "StringEqualsIfExists": {
                                        "iam:PassedToService": PASS_ROLE_SERVICES
                                    }
                                },
                                "Effect": "Allow",
                                "Resource": "*",
                            }
                        ),
                        Match.object_like(
                            {
                                "Action": Match.array_with(["s3:GetObject*"]),
                                "Effect": "Allow",
                            }
                        ),
                    ]
                )
            }
        },
    )


def test_deploy_stage_uses_the_given_role(stack, build_output):
    role = iam.Role(
        stack,
        "DeployRole",
        assumed_by=iam.AccountRootPrincipal(),
    )
    action = EcsDeployAction(
        action_name="Deploy",
        input=build_output,
        cluster_name="web",
        service_name="api",
        role=role,
    )
    build_pipeline(stack, action, build_output)
    template = Template.from_stack(stack)

    template.has_resource_properties(
        "AWS::IAM::Policy",
        {
            "PolicyDocument": {
                "Statement": Match.array_with(
                    [Match.object_like({"Action": "iam:PassRole", "Resource": "*"})]
                )
            },
            "Roles": [{"Ref": Match.string_like_regexp("DeployRole")}],
        },
    )
