"""
Scaffolding for new registrable resource types.
Maintainers: Eric Wilson
MIT License. See Project Root for license information.
"""

import json
import re
import sys
from pathlib import Path
from typing import Any, Dict

from aws_lambda_powertools import Logger

logger = Logger(service="TypeTemplate", stream=sys.stderr)

TYPE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9]{2,64}::[A-Za-z0-9]{2,64}::[A-Za-z0-9]{2,64}$")

# namespaces owned by AWS; third-party types may not use them
RESERVED_NAMESPACES = frozenset(["AWS", "Alexa", "Amazon", "ASK", "AWSQuickStart", "Custom", "Dev"])


def validate_type_name(type_name: str) -> str:
    """
    Check a resource type name has the ``Organization::Service::Resource`` form.

    Raises:
        ValueError: If the name is malformed or uses a reserved namespace
    """
    if not type_name or not TYPE_NAME_PATTERN.match(type_name):
        raise ValueError(
            f"'{type_name}' is not a valid resource type name. "
            "Expected the form Organization::Service::Resource"
        )
    namespace = type_name.split("::", 1)[0]
    if namespace in RESERVED_NAMESPACES:
        raise ValueError(f"'{namespace}' is a reserved namespace and cannot be used for '{type_name}'")
    return type_name


def schema_file_name(type_name: str) -> str:
    """Atlassian::Opsgenie::User -> atlassian-opsgenie-user.json"""
    return "-".join(part.lower() for part in type_name.split("::")) + ".json"


def build_schema(type_name: str) -> Dict[str, Any]:
    """A minimal resource provider schema with an Id primary identifier"""
    return {
        "typeName": type_name,
        "description": f"Resource schema for {type_name}.",
        "properties": {
            "Id": {
                "description": "The identifier of the resource.",
                "type": "string",
            },
        },
        "additionalProperties": False,
        "required": [],
        "readOnlyProperties": ["/properties/Id"],
        "primaryIdentifier": ["/properties/Id"],
        "handlers": {
            "create": {"permissions": []},
            "read": {"permissions": []},
            "update": {"permissions": []},
            "delete": {"permissions": []},
            "list": {"permissions": []},
        },
    }


def write_schema(type_name: str, directory: Path) -> Path:
    """
    Write the schema skeleton for ``type_name`` into ``directory``.

    Raises:
        ValueError: If the type name is invalid
        FileExistsError: If the schema file already exists
    """
    validate_type_name(type_name)

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / schema_file_name(type_name)
    if path.exists():
        raise FileExistsError(f"{path} already exists, refusing to overwrite it")

    path.write_text(json.dumps(build_schema(type_name), indent=4) + "\n", encoding="utf-8")
    logger.info(f"Wrote resource schema for {type_name} to {path}")
    return path
