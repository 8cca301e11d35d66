"""
SDK Provider - thin boto3 facade for account/region lookup and service clients
Maintainers: Eric Wilson
MIT License. See Project Root for license information.
"""

import sys
from enum import Enum
from typing import Any, Optional

import boto3
from aws_lambda_powertools import Logger

logger = Logger(service="SdkProvider", stream=sys.stderr)

DEFAULT_REGION = "us-east-1"


class Mode(Enum):
    """What the credentials will be used for"""

    FOR_READING = "for-reading"
    FOR_WRITING = "for-writing"


class SdkProvider:
    """
    Resolves the default account and region and creates service clients.

    Credentials and region come from the standard boto3 chain (AWS_PROFILE,
    AWS_REGION / AWS_DEFAULT_REGION, shared config files, instance roles)
    unless a profile or region is given explicitly.
    """

    def __init__(
        self,
        session: Optional[boto3.session.Session] = None,
        profile: Optional[str] = None,
        region: Optional[str] = None,
    ) -> None:
        self._session = session or boto3.session.Session(profile_name=profile)
        self._region = region
        self._account: Optional[str] = None

    @property
    def session(self) -> boto3.session.Session:
        return self._session

    def default_region(self) -> str:
        """The explicit region, else the session's region, else us-east-1"""
        region = self._region or self._session.region_name
        if not region:
            logger.debug(f"No region configured, falling back to {DEFAULT_REGION}")
            region = DEFAULT_REGION
        return region

    def default_account(self) -> str:
        """The account of the current credentials (cached after the first call)"""
        if self._account is None:
            sts = self._session.client("sts", region_name=self.default_region())
            identity = sts.get_caller_identity()
            self._account = identity["Account"]
            logger.debug(f"Resolved default account {self._account}")
        return self._account

    def cloudformation(self, account: str, region: str, mode: Mode) -> Any:
        """
        Create a CloudFormation client for the given account and region.

        Raises:
            ValueError: If the current credentials belong to a different account
        """
        current_account = self.default_account()
        if account != current_account:
            raise ValueError(
                f"Need to perform AWS calls for account {account}, "
                f"but the current credentials are for {current_account}"
            )
        logger.debug(f"Creating CloudFormation client in {account}/{region} ({mode.value})")
        return self._session.client("cloudformation", region_name=region)
