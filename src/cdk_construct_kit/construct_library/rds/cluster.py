"""
RDS Cluster Constructs for CDK-Construct-Kit
Maintainers: Eric Wilson
MIT License.  See Project Root for the license information.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

import aws_cdk as cdk
from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_rds as rds
from aws_lambda_powertools import Logger
from constructs import Construct

from cdk_construct_kit.configurations.resources.rds_cluster import (
    BaseClusterConfig,
    DatabaseClusterEngineMode,
    ProvisionedClusterConfig,
    ServerlessClusterConfig,
    VpcPlacementConfig,
)
from cdk_construct_kit.construct_library.rds.endpoint import Endpoint

logger = Logger(service="RdsCluster")

_SUBNET_TYPES = {
    "public": ec2.SubnetType.PUBLIC,
    "private": ec2.SubnetType.PRIVATE_WITH_EGRESS,
    "private_with_egress": ec2.SubnetType.PRIVATE_WITH_EGRESS,
    "isolated": ec2.SubnetType.PRIVATE_ISOLATED,
    "private_isolated": ec2.SubnetType.PRIVATE_ISOLATED,
}


@dataclass
class DatabaseClusterAttributes:
    """Everything needed to reference a cluster that lives in another stack"""

    port: Union[str, int]
    security_group_id: str
    cluster_identifier: str
    cluster_endpoint_address: str
    reader_endpoint_address: str
    instance_identifiers: List[str] = field(default_factory=list)
    instance_endpoint_addresses: List[str] = field(default_factory=list)


def database_instance_type(instance_type: str) -> str:
    """Turn a regular instance type into a database instance type"""
    return f"db.{instance_type}"


def _as_port_number(port: Union[str, int]) -> Union[int, float]:
    if isinstance(port, int):
        return port
    if cdk.Token.is_unresolved(port):
        return cdk.Token.as_number(port)
    return int(port)


class BaseCluster(Construct):
    """
    Common base of the provisioned and serverless clusters.

    Creates the subnet group, the security group and the cluster resource.
    Subclasses contribute extra cluster properties and (optionally) instances.
    """

    config_class = BaseClusterConfig

    @staticmethod
    def from_cluster_attributes(
        scope: Construct, id: str, attributes: DatabaseClusterAttributes
    ) -> "ImportedDatabaseCluster":
        """Import an existing database cluster from its attributes"""
        return ImportedDatabaseCluster(scope, id, attributes)

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        vpc: ec2.IVpc,
        config: Union[BaseClusterConfig, Dict[str, Any]],
    ) -> None:
        super().__init__(scope, id)

        self.config = self._load_config(config)
        self.vpc = vpc
        # identifiers and endpoints of the individual instances
        self.instance_identifiers: List[str] = []
        self.instance_endpoints: List[Endpoint] = []

        self.subnets = self._select_subnets(vpc, self.config.vpc_placement)
        subnet_count = len(self.subnets.subnet_ids)

        # Cannot test whether the subnets are in different AZs, but at least we can test the amount.
        if subnet_count < 2:
            raise ValueError(f"Cluster requires at least 2 subnets, got {subnet_count}")

        logger.info(f"Creating database cluster {id} in {subnet_count} subnets")

        self.subnet_group = rds.CfnDBSubnetGroup(
            self,
            "Subnets",
            db_subnet_group_description=f"Subnets for {id} database",
            subnet_ids=self.subnets.subnet_ids,
        )

        self.security_group = ec2.SecurityGroup(
            self, "SecurityGroup", description="RDS security group", vpc=vpc
        )
        self.security_group_id = self.security_group.security_group_id

        self.cluster = rds.CfnDBCluster(self, "Resource", **self._get_cluster_props(self.config))

        self.cluster_identifier = self.cluster.ref
        self.cluster_endpoint = Endpoint(
            self.cluster.attr_endpoint_address, self.cluster.attr_endpoint_port
        )
        self.reader_endpoint = Endpoint(
            self.cluster.attr_read_endpoint_address, self.cluster.attr_endpoint_port
        )

        self.connections = ec2.Connections(
            security_groups=[self.security_group],
            default_port=ec2.Port.tcp(_as_port_number(self.cluster_endpoint.port)),
        )

        for key, value in self.config.tags.items():
            cdk.Tags.of(self).add(key, value)

        self.setup_instances(self.config)

    @classmethod
    def _load_config(cls, config: Union[BaseClusterConfig, Dict[str, Any]]) -> BaseClusterConfig:
        if isinstance(config, cls.config_class):
            return config
        if isinstance(config, BaseClusterConfig):
            return cls.config_class(config.dictionary)
        return cls.config_class(config)

    def _select_subnets(
        self, vpc: ec2.IVpc, placement: VpcPlacementConfig
    ) -> ec2.SelectedSubnets:
        subnet_type = _SUBNET_TYPES.get(placement.subnet_type) if placement.subnet_type else None
        return vpc.select_subnets(
            subnet_type=subnet_type,
            subnet_group_name=placement.subnet_group_name,
        )

    def extra_cluster_props(self, config: BaseClusterConfig) -> Dict[str, Any]:
        """Cluster properties contributed by subclasses; they win over the base ones"""
        return {}

    def setup_instances(self, config: BaseClusterConfig) -> None:
        """Create the cluster instances, if the cluster type has any"""
        return

    def _get_cluster_props(self, config: BaseClusterConfig) -> Dict[str, Any]:
        backup = config.backup
        props = {
            # Basic
            "engine": config.engine.value,
            "db_cluster_identifier": config.cluster_identifier,
            "db_subnet_group_name": self.subnet_group.ref,
            "vpc_security_group_ids": [self.security_group_id],
            "port": config.port,
            "db_cluster_parameter_group_name": config.parameter_group_name,
            # Admin
            "master_username": config.master_user.username,
            "master_user_password": config.master_user.password,
            "backup_retention_period": backup.retention_days if backup else None,
            "preferred_backup_window": backup.preferred_window if backup else None,
            "preferred_maintenance_window": config.preferred_maintenance_window,
            "database_name": config.default_database_name,
        }
        props.update(self.extra_cluster_props(config))
        return props

    def export(self) -> DatabaseClusterAttributes:
        """
        Export the cluster for importing in another stack.

        Creates one CloudFormation output (with an export name) per attribute
        and returns attributes that import those exports.
        """
        return DatabaseClusterAttributes(
            port=self._export_value("Port", self.cluster_endpoint.port),
            security_group_id=self._export_value("SecurityGroupId", self.security_group_id),
            cluster_identifier=self._export_value("ClusterIdentifier", self.cluster_identifier),
            instance_identifiers=self._export_list("InstanceIdentifiers", self.instance_identifiers),
            cluster_endpoint_address=self._export_value(
                "ClusterEndpointAddress", self.cluster_endpoint.hostname
            ),
            reader_endpoint_address=self._export_value(
                "ReaderEndpointAddress", self.reader_endpoint.hostname
            ),
            instance_endpoint_addresses=self._export_list(
                "InstanceEndpointAddresses", [e.hostname for e in self.instance_endpoints]
            ),
        )

    def _export_name(self, name: str) -> str:
        return f"{cdk.Stack.of(self).stack_name}:{cdk.Names.unique_id(self)}{name}"

    def _export_value(self, name: str, value: Any) -> str:
        export_name = self._export_name(name)
        cdk.CfnOutput(self, name, value=str(value), export_name=export_name)
        return cdk.Fn.import_value(export_name)

    def _export_list(self, name: str, values: List[str]) -> List[str]:
        if not values:
            logger.debug(f"Nothing to export for {name}")
            return []
        export_name = self._export_name(name)
        cdk.CfnOutput(self, name, value=cdk.Fn.join(",", values), export_name=export_name)
        return cdk.Fn.split(",", cdk.Fn.import_value(export_name), len(values))


class DatabaseCluster(BaseCluster):
    """
    Create a clustered database with a given number of instances.
    """

    config_class = ProvisionedClusterConfig

    def extra_cluster_props(self, config: ProvisionedClusterConfig) -> Dict[str, Any]:
        # Configure Encryption
        return {
            "kms_key_id": config.kms_key_arn,
            "storage_encrypted": bool(config.kms_key_arn),
        }

    def setup_instances(self, config: ProvisionedClusterConfig) -> None:
        instance_count = config.instances
        if instance_count < 1:
            raise ValueError("At least one instance is required")

        placement = config.vpc_placement
        publicly_accessible = placement.is_public if placement.subnet_type else None

        for i in range(instance_count):
            instance_index = i + 1

            if config.instance_identifier_base is not None:
                instance_identifier = f"{config.instance_identifier_base}{instance_index}"
            elif config.cluster_identifier is not None:
                instance_identifier = f"{config.cluster_identifier}instance{instance_index}"
            else:
                instance_identifier = None

            instance = rds.CfnDBInstance(
                self,
                f"Instance{instance_index}",
                # Link to cluster
                engine=config.engine.value,
                db_cluster_identifier=self.cluster.ref,
                db_instance_identifier=instance_identifier,
                # Instance properties
                db_instance_class=database_instance_type(config.instance_type),
                publicly_accessible=publicly_accessible,
                db_subnet_group_name=self.subnet_group.ref,
            )

            # NAT gateways / internet gateways must exist before the instances
            instance.node.add_dependency(self.subnets.internet_connectivity_established)

            self.instance_identifiers.append(instance.ref)
            self.instance_endpoints.append(
                Endpoint(instance.attr_endpoint_address, instance.attr_endpoint_port)
            )

        logger.info(f"Created {instance_count} database instance(s) for {self.node.id}")


class ServerlessCluster(BaseCluster):
    """
    Create a serverless (Aurora Serverless v1) database cluster
    """

    config_class = ServerlessClusterConfig

    def extra_cluster_props(self, config: ServerlessClusterConfig) -> Dict[str, Any]:
        scaling_configuration = config.merged_scaling_configuration
        return {
            "engine_mode": DatabaseClusterEngineMode.SERVERLESS.value,
            "scaling_configuration": rds.CfnDBCluster.ScalingConfigurationProperty(
                **scaling_configuration
            ),
        }


class ImportedDatabaseCluster(Construct):
    """
    An imported database cluster
    """

    def __init__(self, scope: Construct, id: str, attributes: DatabaseClusterAttributes) -> None:
        super().__init__(scope, id)
        self._attributes = attributes

        self.security_group_id = attributes.security_group_id
        self.default_port = ec2.Port.tcp(_as_port_number(attributes.port))
        self.connections = ec2.Connections(
            security_groups=[
                ec2.SecurityGroup.from_security_group_id(
                    self, "SecurityGroup", attributes.security_group_id
                )
            ],
            default_port=self.default_port,
        )
        self.cluster_identifier = attributes.cluster_identifier
        self.instance_identifiers: List[str] = list(attributes.instance_identifiers)
        self.cluster_endpoint = Endpoint(attributes.cluster_endpoint_address, attributes.port)
        self.reader_endpoint = Endpoint(attributes.reader_endpoint_address, attributes.port)
        self.instance_endpoints: List[Endpoint] = [
            Endpoint(address, attributes.port) for address in attributes.instance_endpoint_addresses
        ]

    def export(self) -> DatabaseClusterAttributes:
        return self._attributes
