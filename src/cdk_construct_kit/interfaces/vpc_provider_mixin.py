"""
VPC Provider Mixin - Reusable VPC resolution functionality
Maintainers: Eric Wilson
MIT License. See Project Root for license information.
"""

from typing import Optional, List, Any
import aws_cdk as cdk
from aws_lambda_powertools import Logger
from aws_cdk import aws_ec2 as ec2

logger = Logger(__name__)

_SUBNET_ATTRIBUTE = {
    "public": "public_subnet_ids",
    "isolated": "isolated_subnet_ids",
    "private_isolated": "isolated_subnet_ids",
}


class VPCProviderMixin:
    """
    Mixin class that resolves the VPC a stack deploys into.

    Priority order:
    1. SSM imported ``vpc_id`` (plus optional ``subnet_ids``), read through
       ``SsmParameterMixin.get_ssm_imported_value``
    2. Config-level ``vpc_id`` (looked up at synthesis time)

    ``ssm.imports.subnet_ids`` must be a list of parameter paths, one String
    parameter per subnet.  A single StringList parameter cannot be split at
    synthesis time.

    Stacks using this mixin must also use ``SsmParameterMixin``.
    """

    def _initialize_vpc_cache(self) -> None:
        """Initialize the VPC cache attribute"""
        if not hasattr(self, "_vpc"):
            self._vpc: Optional[ec2.IVpc] = None

    def resolve_vpc(self, config: Any) -> ec2.IVpc:
        """
        Resolve the VPC for ``config``.

        Args:
            config: The resource configuration (``vpc_id`` and ``vpc_placement`` are read)

        Returns:
            Resolved VPC reference

        Raises:
            ValueError: If no VPC configuration is found
        """
        if self._vpc:
            return self._vpc

        if self.has_ssm_import("vpc_id"):
            self._vpc = self._create_vpc_from_ssm(
                self.get_ssm_imported_value("vpc_id"),
                self.get_ssm_imported_value("subnet_ids"),
                config,
            )
        elif getattr(config, "vpc_id", None):
            logger.info(f"Looking up VPC {config.vpc_id}")
            self._vpc = ec2.Vpc.from_lookup(self, f"{self.stack_name}-VPC", vpc_id=config.vpc_id)
        else:
            raise self._create_vpc_not_found_error(config)

        return self._vpc

    def _create_vpc_from_ssm(self, vpc_id: str, subnet_ids: Any, config: Any) -> ec2.IVpc:
        """
        Create a VPC reference from SSM imported values.

        Imported subnets are registered under the subnet group the config places
        the resource in (private unless the placement says otherwise).
        """
        if isinstance(subnet_ids, str):
            if cdk.Token.is_unresolved(subnet_ids):
                raise ValueError(
                    "ssm.imports.subnet_ids must be a list of parameter paths (one per subnet), "
                    "a single parameter cannot be split into subnets at synthesis time"
                )
            # comma separated list
            subnet_ids = [s.strip() for s in subnet_ids.split(",") if s.strip()]
        subnet_ids: List[str] = list(subnet_ids or [])

        vpc_attrs = {
            "vpc_id": vpc_id,
            "availability_zones": [
                cdk.Fn.select(index, cdk.Fn.get_azs()) for index in range(max(len(subnet_ids), 1))
            ],
        }

        if subnet_ids:
            placement = getattr(config, "vpc_placement", None)
            subnet_type = placement.subnet_type if placement is not None else None
            vpc_attrs[_SUBNET_ATTRIBUTE.get(subnet_type, "private_subnet_ids")] = subnet_ids

        logger.info(f"Using VPC from SSM with {len(subnet_ids)} subnet(s)")
        return ec2.Vpc.from_vpc_attributes(self, f"{self.stack_name}-VPC", **vpc_attrs)

    def _create_vpc_not_found_error(self, config: Any) -> ValueError:
        config_name = getattr(config, "name", "unknown")
        return ValueError(
            f"VPC is not defined in the configuration for {config_name}. "
            f"You can provide it at the following locations:\n"
            f"  1. As an SSM import: ssm.imports.vpc_id\n"
            f"  2. At the config level: vpc_id"
        )
