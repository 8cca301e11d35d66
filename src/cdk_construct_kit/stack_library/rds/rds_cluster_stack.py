"""
RDS Cluster Stack Pattern for CDK-Construct-Kit
Maintainers: Eric Wilson
MIT License.  See Project Root for the license information.
"""

from typing import Any, Dict, Optional, Union

import aws_cdk as cdk
from aws_cdk import aws_ec2 as ec2
from aws_lambda_powertools import Logger
from constructs import Construct

from cdk_construct_kit.configurations.resources.rds_cluster import (
    BaseClusterConfig,
    DatabaseClusterEngineMode,
    ProvisionedClusterConfig,
    ServerlessClusterConfig,
)
from cdk_construct_kit.construct_library.rds.cluster import (
    BaseCluster,
    DatabaseCluster,
    ServerlessCluster,
)
from cdk_construct_kit.interfaces.ssm_parameter_mixin import SsmParameterMixin
from cdk_construct_kit.interfaces.vpc_provider_mixin import VPCProviderMixin

logger = Logger(service="RdsClusterStack")


class RdsClusterStack(cdk.Stack, VPCProviderMixin, SsmParameterMixin):
    """
    Reusable stack for Aurora / Neptune database clusters.
    Builds a provisioned or serverless cluster from the ``rds_cluster`` section
    of the stack configuration.
    """

    def __init__(self, scope: Construct, id: str, **kwargs) -> None:
        super().__init__(scope, id, **kwargs)
        self._initialize_vpc_cache()
        self.initialize_ssm_imports()
        self.cluster_config: Optional[BaseClusterConfig] = None
        self.cluster: Optional[BaseCluster] = None

    def build(self, stack_config: Dict[str, Any]) -> BaseCluster:
        """Build the RDS cluster stack"""
        return self._build(stack_config)

    def _build(self, stack_config: Dict[str, Any]) -> BaseCluster:
        """Internal build method for the RDS cluster stack"""
        cluster_dict = stack_config.get("rds_cluster", {})
        self.cluster_config = self._load_cluster_config(cluster_dict)
        cluster_name = self.cluster_config.name

        logger.info(
            f"Creating RDS cluster stack: {cluster_name} ({self.cluster_config.engine_mode.value})"
        )

        # Process SSM imports first
        self.process_ssm_imports(self.cluster_config, resource_type="rds_cluster")

        vpc = self._get_vpc()

        if isinstance(self.cluster_config, ServerlessClusterConfig):
            self.cluster = ServerlessCluster(self, cluster_name, vpc=vpc, config=self.cluster_config)
        else:
            self.cluster = DatabaseCluster(self, cluster_name, vpc=vpc, config=self.cluster_config)

        self._add_outputs(cluster_name)
        self._export_ssm_parameters(cluster_name)

        logger.info(f"RDS cluster stack created: {cluster_name}")
        return self.cluster

    @staticmethod
    def _load_cluster_config(
        cluster_dict: Dict[str, Any],
    ) -> Union[ProvisionedClusterConfig, ServerlessClusterConfig]:
        mode = BaseClusterConfig(cluster_dict).engine_mode
        if mode == DatabaseClusterEngineMode.SERVERLESS:
            return ServerlessClusterConfig(cluster_dict)
        return ProvisionedClusterConfig(cluster_dict)

    def _get_vpc(self) -> ec2.IVpc:
        """Get the VPC using the VPC provider mixin"""
        return self.resolve_vpc(self.cluster_config)

    def _resource_values(self) -> Dict[str, str]:
        return {
            "cluster_endpoint": self.cluster.cluster_endpoint.hostname,
            "reader_endpoint": self.cluster.reader_endpoint.hostname,
            "port": self.cluster.cluster_endpoint.port,
            "cluster_identifier": self.cluster.cluster_identifier,
            "security_group_id": self.cluster.security_group_id,
        }

    def _add_outputs(self, cluster_name: str) -> None:
        """Add CloudFormation outputs for the cluster"""
        cdk.CfnOutput(
            self,
            f"{cluster_name}-endpoint",
            value=self.cluster.cluster_endpoint.hostname,
            description=f"Writer endpoint of {cluster_name}",
        )
        cdk.CfnOutput(
            self,
            f"{cluster_name}-reader-endpoint",
            value=self.cluster.reader_endpoint.hostname,
            description=f"Reader endpoint of {cluster_name}",
        )
        cdk.CfnOutput(
            self,
            f"{cluster_name}-port",
            value=self.cluster.cluster_endpoint.port,
            description=f"Port of {cluster_name}",
        )

    def _export_ssm_parameters(self, cluster_name: str) -> None:
        """Export the cluster connection info to SSM Parameter Store"""
        exported = self.export_resource_to_ssm(
            scope=self,
            resource_values=self._resource_values(),
            config=self.cluster_config,
            resource_name=cluster_name,
        )
        if exported:
            logger.info(f"Exported {len(exported)} SSM parameter(s) for {cluster_name}")
