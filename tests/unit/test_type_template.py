"""
Unit tests for the resource type schema scaffolding
"""

import json

import pytest

from cdk_construct_kit.custom_types.type_template import (
    build_schema,
    schema_file_name,
    validate_type_name,
    write_schema,
)


@pytest.mark.parametrize(
    "type_name",
    ["Acme", "Acme::Widgets", "Acme::Widgets::Gadget::Extra", "Acme::Wid gets::Gadget", ""],
)
def test_malformed_type_names(type_name):
    with pytest.raises(ValueError, match="not a valid resource type name"):
        validate_type_name(type_name)


def test_reserved_namespace():
    with pytest.raises(ValueError, match="reserved namespace"):
        validate_type_name("AWS::Widgets::Gadget")


def test_schema_file_name():
    assert schema_file_name("Atlassian::Opsgenie::User") == "atlassian-opsgenie-user.json"


def test_schema_skeleton():
    schema = build_schema("Acme::Widgets::Gadget")

    assert schema["typeName"] == "Acme::Widgets::Gadget"
    assert schema["primaryIdentifier"] == ["/properties/Id"]
    assert schema["readOnlyProperties"] == ["/properties/Id"]
    assert set(schema["handlers"]) == {"create", "read", "update", "delete", "list"}
    assert schema["additionalProperties"] is False


def test_write_schema(tmp_path):
    path = write_schema("Acme::Widgets::Gadget", tmp_path / "schemas")

    assert path == tmp_path / "schemas" / "acme-widgets-gadget.json"
    assert json.loads(path.read_text())["typeName"] == "Acme::Widgets::Gadget"


def test_write_schema_does_not_overwrite(tmp_path):
    path = write_schema("Acme::Widgets::Gadget", tmp_path)
    path.write_text("{}")

    with pytest.raises(FileExistsError):
        write_schema("Acme::Widgets::Gadget", tmp_path)

    assert path.read_text() == "{}"
