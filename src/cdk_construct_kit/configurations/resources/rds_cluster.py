"""
RdsClusterConfig - supports RDS (Aurora / Neptune) cluster settings for AWS CDK.
Maintainers: Eric Wilson
MIT License. See Project Root for license information.
"""

from enum import Enum
from typing import Any, Dict, Optional
from aws_lambda_powertools import Logger

from cdk_construct_kit.configurations.base_config import BaseConfig

logger = Logger(service="RdsClusterConfig")


class DatabaseClusterEngineMode(str, Enum):
    """Is this cluster provisioned, or serverless"""

    PROVISIONED = "provisioned"
    SERVERLESS = "serverless"


class DatabaseClusterEngine(str, Enum):
    """The engine for the database cluster"""

    AURORA = "aurora"  # Aurora MySQL 5.6
    AURORA_MYSQL = "aurora-mysql"  # Aurora MySQL 5.7
    AURORA_POSTGRESQL = "aurora-postgresql"
    NEPTUNE = "neptune"

    @classmethod
    def parse(cls, value) -> "DatabaseClusterEngine":
        """Accepts an engine member or its CloudFormation name (case insensitive)"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            supported = ", ".join(e.value for e in cls)
            raise ValueError(
                f"Unsupported database cluster engine: {value}. Supported engines: {supported}"
            ) from None


DEFAULT_SERVERLESS_SCALING_CONFIGURATION: Dict[str, Any] = {
    "auto_pause": True,
    "max_capacity": 8,
    "min_capacity": 2,
    "seconds_until_auto_pause": 300,
}

SCALING_CONFIGURATION_KEYS = frozenset(
    [
        "auto_pause",
        "max_capacity",
        "min_capacity",
        "seconds_before_timeout",
        "seconds_until_auto_pause",
        "timeout_action",
    ]
)

SUBNET_TYPES = ("public", "private", "private_with_egress", "isolated", "private_isolated")


class MasterUserConfig(BaseConfig):
    """Username and password for the administrative user"""

    @property
    def username(self) -> str:
        return self.required("username", owner="master_user")

    @property
    def password(self) -> str:
        """
        Password.

        Do not put passwords in your CDK code directly. Resolve it from a stack
        parameter or the SSM Parameter Store instead.
        """
        return self.required("password", owner="master_user")


class BackupConfig(BaseConfig):
    """Backup configuration for RDS clusters"""

    @property
    def retention_days(self) -> int:
        """How many days to retain the backup"""
        return int(self.required("retention_days", owner="backup"))

    @property
    def preferred_window(self) -> Optional[str]:
        """
        A daily time range in 24-hours UTC format in which backups preferably execute.
        Must be at least 30 minutes long.  Example: '01:00-02:00'
        """
        return self.get("preferred_window")


class VpcPlacementConfig(BaseConfig):
    """Where to place the cluster within the VPC"""

    @property
    def subnet_type(self) -> Optional[str]:
        value = self.get("subnet_type")
        if value is None:
            return None
        normalized = str(value).lower().replace("-", "_")
        if normalized not in SUBNET_TYPES:
            raise ValueError(
                f"Unsupported subnet_type '{value}'. Supported values: {', '.join(SUBNET_TYPES)}"
            )
        return normalized

    @property
    def subnet_group_name(self) -> Optional[str]:
        return self.get("subnet_group_name")

    @property
    def is_public(self) -> bool:
        return self.subnet_type == "public"


class BaseClusterConfig(BaseConfig):
    """
    Properties shared by provisioned and serverless clusters.
    Each property reads from the config dict and provides a default where one makes sense.
    """

    resource_type = "rds_cluster"

    @property
    def name(self) -> str:
        """Logical name of the cluster (used by stacks for outputs)"""
        return self.get("name", "database")

    @property
    def engine(self) -> DatabaseClusterEngine:
        """What kind of database to start"""
        return DatabaseClusterEngine.parse(self.required("engine", owner=self.resource_type))

    @property
    def engine_mode(self) -> DatabaseClusterEngineMode:
        value = self.get("engine_mode", DatabaseClusterEngineMode.PROVISIONED.value)
        try:
            return DatabaseClusterEngineMode(str(value).lower())
        except ValueError:
            raise ValueError(f"Unsupported engine_mode: {value}") from None

    @property
    def master_user(self) -> MasterUserConfig:
        if not self.get("master_user"):
            raise ValueError(f"'master_user' is required in the {self.resource_type} configuration")
        return MasterUserConfig(self.section("master_user"))

    @property
    def backup(self) -> Optional[BackupConfig]:
        if not self.get("backup"):
            return None
        return BackupConfig(self.section("backup"))

    @property
    def port(self) -> Optional[int]:
        """What port to listen on. The engine default is used when not supplied."""
        port = self.get("port")
        return int(port) if port is not None else None

    @property
    def cluster_identifier(self) -> Optional[str]:
        """An optional identifier for the cluster, generated when not supplied"""
        return self.get("cluster_identifier")

    @property
    def instance_identifier_base(self) -> Optional[str]:
        """
        Base identifier for instances.
        Every instance is named by appending its 1-based number to this string.
        """
        return self.get("instance_identifier_base")

    @property
    def default_database_name(self) -> Optional[str]:
        """Name of a database which is automatically created inside the cluster"""
        return self.get("default_database_name")

    @property
    def parameter_group_name(self) -> Optional[str]:
        """Name of an existing DB cluster parameter group"""
        return self.get("parameter_group_name")

    @property
    def preferred_maintenance_window(self) -> Optional[str]:
        return self.get("preferred_maintenance_window")

    @property
    def vpc_placement(self) -> VpcPlacementConfig:
        return VpcPlacementConfig(self.section("vpc_placement"))

    @property
    def vpc_id(self) -> Optional[str]:
        """VPC to look up when the cluster is built by a stack"""
        return self.get("vpc_id")

    @property
    def tags(self) -> Dict[str, str]:
        return self.get("tags", {})


class ProvisionedClusterConfig(BaseClusterConfig):
    """Properties specific to clusters with provisioned instances"""

    @property
    def instance_type(self) -> str:
        """
        Instance type of the replicas, e.g. "t3.medium".
        A leading "db." is accepted and stripped.
        """
        instance_type = str(self.required("instance_type", owner=self.resource_type))
        if instance_type.startswith("db."):
            instance_type = instance_type[len("db."):]
        return instance_type

    @property
    def instances(self) -> int:
        """How many replicas/instances to create. Defaults to 2."""
        instances = self.get("instances")
        return int(instances) if instances is not None else 2

    @property
    def kms_key_arn(self) -> Optional[str]:
        """ARN of the KMS key used for storage encryption"""
        return self.get("kms_key_arn")


class ServerlessClusterConfig(BaseClusterConfig):
    """Properties specific to serverless clusters"""

    @property
    def engine(self) -> DatabaseClusterEngine:
        """
        Aurora MySQL 5.6 ("aurora") is the only engine supported for serverless clusters.
        """
        engine = super().engine
        if engine != DatabaseClusterEngine.AURORA:
            raise ValueError(
                f"Serverless clusters only support the '{DatabaseClusterEngine.AURORA.value}' engine, "
                f"got '{engine.value}'"
            )
        return engine

    @property
    def scaling_configuration(self) -> Dict[str, Any]:
        """Caller overrides for the serverless scaling configuration"""
        overrides = self.section("scaling_configuration")
        unknown = sorted(set(overrides) - SCALING_CONFIGURATION_KEYS)
        if unknown:
            raise ValueError(
                f"Unknown scaling_configuration keys: {unknown}. "
                f"Accepted keys are: {sorted(SCALING_CONFIGURATION_KEYS)}"
            )
        return dict(overrides)

    @property
    def merged_scaling_configuration(self) -> Dict[str, Any]:
        """The default scaling configuration with the overrides applied on top"""
        merged = {**DEFAULT_SERVERLESS_SCALING_CONFIGURATION, **self.scaling_configuration}
        logger.debug(f"Serverless scaling configuration: {merged}")
        return merged
