"""
CustomTypes - manage custom resource types on the CloudFormation Registry
Maintainers: Eric Wilson
MIT License. See Project Root for license information.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from aws_lambda_powertools import Logger

from cdk_construct_kit.custom_types.known_types import KNOWN_TYPES
from cdk_construct_kit.custom_types.type_template import write_schema
from cdk_construct_kit.sdk.sdk_provider import Mode, SdkProvider

logger = Logger(service="CustomTypes", stream=sys.stderr)


class CustomTypes:
    """
    Lists registered resource types and registers the known third-party ones.
    """

    def __init__(self, aws: SdkProvider) -> None:
        self.aws = aws

    def _cloudformation(self, mode: Mode) -> Any:
        account = self.aws.default_account()
        region = self.aws.default_region()
        return self.aws.cloudformation(account, region, mode)

    def list_types(self) -> List[Dict[str, Any]]:
        """
        All resource type summaries visible to the account.

        Returns:
            The ``TypeSummaries`` of every page; an empty list when there are none
        """
        cfn = self._cloudformation(Mode.FOR_READING)

        summaries: List[Dict[str, Any]] = []
        paginator = cfn.get_paginator("list_types")
        for page in paginator.paginate():
            summaries.extend(page.get("TypeSummaries") or [])

        logger.debug(f"Found {len(summaries)} registered type(s)")
        return summaries

    def register_known_type(self, type_name: str) -> Optional[str]:
        """
        Register one of the known third-party types.

        Returns:
            The registration token

        Raises:
            TypeError: If ``type_name`` is not a known type
        """
        if type_name not in KNOWN_TYPES:
            raise TypeError(f"'{type_name}' is not a known resource type")

        cfn = self._cloudformation(Mode.FOR_WRITING)
        result = cfn.register_type(
            Type="RESOURCE",
            TypeName=type_name,
            SchemaHandlerPackage=KNOWN_TYPES[type_name],
        )
        token = result.get("RegistrationToken")
        logger.info(f"Registration of {type_name} started: {token}")
        return token

    @staticmethod
    def known_type_names() -> List[str]:
        return sorted(KNOWN_TYPES)

    @staticmethod
    def init_type(type_name: str, directory: Path) -> Path:
        """Bootstrap a registrable resource type schema from the template"""
        return write_schema(type_name, directory)
