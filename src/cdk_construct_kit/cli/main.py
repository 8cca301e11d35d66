"""Command line entry point for cdk-kit."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from cdk_construct_kit.cli import output
from cdk_construct_kit.cli.commands import types as types_command
from cdk_construct_kit.custom_types import custom_types as custom_types_module
from cdk_construct_kit.custom_types import type_template
from cdk_construct_kit.custom_types.custom_types import CustomTypes
from cdk_construct_kit.sdk import sdk_provider
from cdk_construct_kit.sdk.sdk_provider import SdkProvider

logger = Logger(service="cdk-kit", stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cdk-kit", description="CDK construct kit tooling")
    parser.add_argument("--profile", help="Use the indicated AWS profile")
    parser.add_argument("--region", help="Use the indicated AWS region")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logs")

    subparsers = parser.add_subparsers(dest="command", required=True)
    types_command.register(subparsers)
    return parser


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    for module_logger in (
        logger,
        custom_types_module.logger,
        type_template.logger,
        sdk_provider.logger,
    ):
        module_logger.setLevel("DEBUG")


def app(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    def custom_types_factory() -> CustomTypes:
        return CustomTypes(SdkProvider(profile=args.profile, region=args.region))

    try:
        return args.handler(args, custom_types_factory)
    except (TypeError, ValueError, FileExistsError) as exc:
        output.error(str(exc))
        return 1
    except (ClientError, BotoCoreError) as exc:
        logger.error(f"AWS call failed: {exc}")
        output.error(str(exc))
        return 1


def main() -> None:
    raise SystemExit(app())


if __name__ == "__main__":
    main()
