"""``cdk-kit types`` - manage custom resource types on the CloudFormation Registry."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable

from cdk_construct_kit.cli import output
from cdk_construct_kit.custom_types.custom_types import CustomTypes

COMMAND = "types"
ALIASES = ["type"]
DESCRIPTION = "Manage custom resource types on CloudFormation Registry"

EMPTY_LIST_MESSAGE = "There are currently no registered custom types"


def register(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        COMMAND,
        aliases=ALIASES,
        help=DESCRIPTION,
        description=DESCRIPTION,
        usage="cdk-kit types COMMAND",
    )
    commands = parser.add_subparsers(dest="types_command", required=True, metavar="COMMAND")

    commands.add_parser("list", help="Lists all registered resource types")
    commands.add_parser("list-known", help="List all the known third-party resource types")

    init_cmd = commands.add_parser("init", help="Bootstrap a registrable resource type from a template")
    init_cmd.add_argument("type_name", metavar="TYPE_NAME", help="Organization::Service::Resource")
    init_cmd.add_argument(
        "--output-dir", type=Path, default=Path("."), help="Directory to write the schema into"
    )

    register_cmd = commands.add_parser("register-known", help="Register a known third-party resource type")
    register_cmd.add_argument("type_name", metavar="TYPE_NAME")

    parser.set_defaults(handler=run)
    return parser


def run(args: argparse.Namespace, custom_types_factory: Callable[[], CustomTypes]) -> int:
    command = args.types_command

    if command == "list":
        return _list_types(custom_types_factory())
    if command == "list-known":
        output.data_lines(CustomTypes.known_type_names())
        return 0
    if command == "init":
        path = CustomTypes.init_type(args.type_name, args.output_dir)
        output.info(f"Created resource schema {path}")
        return 0
    if command == "register-known":
        token = custom_types_factory().register_known_type(args.type_name)
        output.data(token or "")
        return 0

    raise ValueError(f"Unknown types command: {command}")


def _list_types(custom_types: CustomTypes) -> int:
    types = custom_types.list_types()
    if types:
        for summary in types:
            output.data(summary.get("TypeName") or "")
    else:
        output.info(EMPTY_LIST_MESSAGE)
    return 0
