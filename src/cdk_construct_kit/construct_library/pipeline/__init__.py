"""
Pipeline Construct Library

CodePipeline actions.
"""

from .ecs_deploy_action import EcsDeployAction

__all__ = ["EcsDeployAction"]
