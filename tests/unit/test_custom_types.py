"""
Unit tests for CustomTypes
"""

from unittest.mock import MagicMock

import pytest

from cdk_construct_kit.custom_types import KNOWN_TYPES, CustomTypes
from cdk_construct_kit.sdk import Mode


@pytest.fixture
def aws():
    provider = MagicMock()
    provider.default_account.return_value = "123456789012"
    provider.default_region.return_value = "us-west-2"
    return provider


@pytest.fixture
def cfn(aws):
    return aws.cloudformation.return_value


class TestListTypes:
    def test_no_registered_types(self, aws, cfn):
        cfn.get_paginator.return_value.paginate.return_value = [{"TypeSummaries": []}]

        assert CustomTypes(aws).list_types() == []
        aws.cloudformation.assert_called_once_with("123456789012", "us-west-2", Mode.FOR_READING)
        cfn.get_paginator.assert_called_once_with("list_types")

    def test_missing_summaries_key(self, aws, cfn):
        cfn.get_paginator.return_value.paginate.return_value = [{}]

        assert CustomTypes(aws).list_types() == []

    def test_collects_every_page(self, aws, cfn):
        class Paginator:
            def paginate(self, **kwargs):
                yield {"TypeSummaries": [{"TypeName": "Datadog::Monitors::Monitor"}], "NextToken": "page-2"}
                yield {"TypeSummaries": [{"TypeName": "NewRelic::Alerts::NrqlAlert"}]}

        cfn.get_paginator.return_value = Paginator()

        summaries = CustomTypes(aws).list_types()

        assert [s["TypeName"] for s in summaries] == [
            "Datadog::Monitors::Monitor",
            "NewRelic::Alerts::NrqlAlert",
        ]
        cfn.list_types.assert_not_called()


class TestRegisterKnownType:
    def test_unknown_type_makes_no_sdk_calls(self, aws):
        with pytest.raises(TypeError, match="'Acme::Widgets::Gadget' is not a known resource type"):
            CustomTypes(aws).register_known_type("Acme::Widgets::Gadget")

        aws.default_account.assert_not_called()
        aws.cloudformation.assert_not_called()

    def test_registers_with_schema_handler_package(self, aws, cfn):
        cfn.register_type.return_value = {"RegistrationToken": "token-123"}
        type_name = "Datadog::Monitors::Monitor"

        token = CustomTypes(aws).register_known_type(type_name)

        assert token == "token-123"
        aws.cloudformation.assert_called_once_with("123456789012", "us-west-2", Mode.FOR_WRITING)
        cfn.register_type.assert_called_once_with(
            Type="RESOURCE",
            TypeName=type_name,
            SchemaHandlerPackage=KNOWN_TYPES[type_name],
        )


class TestKnownTypes:
    def test_known_type_names_are_sorted(self):
        names = CustomTypes.known_type_names()

        assert names == sorted(KNOWN_TYPES)
        assert len(names) == 14

    def test_every_package_is_an_s3_url(self):
        for type_name, package in KNOWN_TYPES.items():
            assert package.startswith("s3://"), type_name
            assert package.endswith(".zip"), type_name

    def test_known_types_are_read_only(self):
        with pytest.raises(TypeError):
            KNOWN_TYPES["Acme::Widgets::Gadget"] = "s3://bucket/gadget.zip"
