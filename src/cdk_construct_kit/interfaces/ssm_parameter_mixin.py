"""
Geek Cafe, LLC
Maintainers: Eric Wilson
MIT License. See Project Root for the license information.
"""

from typing import Dict, Any, Optional, Union, List
from aws_cdk import aws_ssm as ssm
from constructs import Construct
from aws_lambda_powertools import Logger

logger = Logger(__name__)


class SsmParameterMixin:
    """
    A mixin class that provides SSM parameter export and import functionality
    for CDK stacks.

    Imported values are cached so other mixins (e.g. the VPC provider) can
    read them through ``get_ssm_imported_value``.
    """

    def initialize_ssm_imports(self) -> None:
        """
        Initialize SSM imports storage.
        Call this in your stack's __init__ method.
        """
        if not hasattr(self, "_ssm_imported_values"):
            self._ssm_imported_values: Dict[str, Union[str, List[str]]] = {}

    def get_ssm_imported_value(self, key: str, default: Any = None) -> Any:
        """
        Get a cached SSM imported value by key.

        Args:
            key: The SSM import key
            default: Default value if key not found

        Returns:
            The imported value or default
        """
        return self._ssm_imported_values.get(key, default)

    def has_ssm_import(self, key: str) -> bool:
        return key in self._ssm_imported_values

    @staticmethod
    def _normalize_parameter_name(parameter_name: str) -> str:
        if not parameter_name.startswith("/"):
            return f"/{parameter_name}"
        return parameter_name

    def process_ssm_imports(self, config: Any, resource_type: str = "resource") -> None:
        """
        Import every parameter listed under ``ssm.imports`` and cache the values.

        A list of paths imports a list of values (e.g. subnet ids).

        Args:
            config: A configuration object with an ``ssm_imports`` property
            resource_type: Type of resource for logging purposes
        """
        ssm_imports = getattr(config, "ssm_imports", {}) or {}

        if not ssm_imports:
            logger.debug(f"No SSM imports configured for {resource_type}")
            return

        logger.info(f"Processing {len(ssm_imports)} SSM imports for {resource_type}")

        for param_key, param_value in ssm_imports.items():
            try:
                if isinstance(param_value, list):
                    self._ssm_imported_values[param_key] = [
                        self.import_ssm_parameter(
                            scope=self,
                            id=f"ssm-import-{param_key}-{index}",
                            parameter_name=path,
                        )
                        for index, path in enumerate(param_value)
                    ]
                    logger.info(f"Imported SSM parameter list: {param_key} with {len(param_value)} items")
                else:
                    self._ssm_imported_values[param_key] = self.import_ssm_parameter(
                        scope=self,
                        id=f"ssm-import-{param_key}",
                        parameter_name=param_value,
                    )
                    logger.info(f"Imported SSM parameter: {param_key} from {param_value}")
            except Exception as e:
                logger.error(f"Failed to import SSM parameter {param_key}: {e}")
                raise

    def export_ssm_parameter(
        self,
        scope: Construct,
        id: str,
        value: str,
        parameter_name: str,
        description: Optional[str] = None,
    ) -> Optional[ssm.StringParameter]:
        """
        Export a value to SSM Parameter Store.

        Args:
            scope: The CDK construct scope
            id: The construct ID for the SSM parameter
            value: The value to store in the parameter
            parameter_name: The name of the parameter in SSM
            description: Optional description for the parameter

        Returns:
            The created SSM parameter, or None when no name was given
        """
        if not parameter_name:
            logger.warning(f"No SSM parameter name provided for {id}, skipping export")
            return None

        parameter_name = self._normalize_parameter_name(parameter_name)
        logger.info(f"Exporting SSM parameter: {parameter_name}")

        return ssm.StringParameter(
            scope=scope,
            id=id,
            string_value=value,
            parameter_name=parameter_name,
            description=description,
        )

    def import_ssm_parameter(
        self,
        scope: Construct,
        id: str,
        parameter_name: str,
    ) -> str:
        """
        Import a value from SSM Parameter Store.

        Returns:
            The parameter value as a (deploy time) string token
        """
        parameter_name = self._normalize_parameter_name(parameter_name)
        logger.info(f"Importing SSM parameter: {parameter_name}")

        return ssm.StringParameter.from_string_parameter_name(
            scope,
            id,
            parameter_name,
        ).string_value

    def export_resource_to_ssm(
        self,
        scope: Construct,
        resource_values: Dict[str, Any],
        config: Any,
        resource_name: str,
    ) -> Dict[str, ssm.StringParameter]:
        """
        Export resource attributes to SSM Parameter Store based on ``ssm.exports``.

        Args:
            scope: The CDK construct scope
            resource_values: Dictionary of resource values to export
            config: Configuration object with an ``ssm_exports`` property
            resource_name: Name of the resource (used as prefix for parameter IDs)

        Returns:
            Dictionary of created SSM parameters

        Raises:
            ValueError: If an export key is not one of the resource values
        """
        ssm_exports = getattr(config, "ssm_exports", {}) or {}

        if not ssm_exports:
            logger.info(f"No SSM export paths configured for {resource_name} resources")
            logger.info(f"The following SSM exports are available: {list(resource_values.keys())}")
            return {}

        missing_keys = [key for key in ssm_exports if key not in resource_values]
        if missing_keys:
            raise ValueError(
                f"The following SSM export keys are not available for {resource_name}: {missing_keys}. "
                f"The accepted keys are: {list(resource_values.keys())}. "
                "Please check your configuration.  Some keys may be misspelled."
            )

        parameters = {}
        for key, path in ssm_exports.items():
            if not path:
                # nothing configured for this key which is acceptable
                continue

            param = self.export_ssm_parameter(
                scope=scope,
                id=f"{resource_name}-{key.replace('_', '-')}-param",
                value=str(resource_values[key]),
                parameter_name=path,
                description=f"Exported {key} from {resource_name}",
            )
            if param:
                parameters[key] = param

        return parameters
