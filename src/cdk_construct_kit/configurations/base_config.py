"""
Geek Cafe, LLC
Maintainers: Eric Wilson
MIT License. See Project Root for the license information.
"""

from typing import Dict, Any, Optional


class BaseConfig:
    """
    Base configuration class for the dictionary backed settings used by the
    constructs and stacks in this library.

    Subclasses expose typed properties on top of the raw dictionary and raise
    ``ValueError`` when a required setting is missing.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the base configuration with a dictionary.

        Args:
            config: Dictionary containing configuration values
        """
        self.__config = config or {}

    @property
    def dictionary(self) -> Dict[str, Any]:
        """
        Get the raw configuration dictionary.

        Returns:
            The configuration dictionary
        """
        return self.__config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Args:
            key: The configuration key
            default: Default value if key is not found

        Returns:
            The configuration value or default
        """
        return self.__config.get(key, default)

    def required(self, key: str, owner: str = "configuration") -> Any:
        """
        Get a configuration value that must be present.

        Args:
            key: The configuration key
            owner: Name used in the error message (e.g. "rds_cluster")

        Returns:
            The configuration value

        Raises:
            ValueError: If the key is missing or empty
        """
        value = self.__config.get(key)
        if value is None or value == "":
            raise ValueError(f"'{key}' is required in the {owner} configuration")
        return value

    def section(self, key: str) -> Dict[str, Any]:
        """
        Get a nested configuration block, defaulting to an empty dictionary.

        Args:
            key: The configuration key of the nested block

        Returns:
            The nested dictionary
        """
        return self.__config.get(key) or {}

    @property
    def ssm(self) -> Dict[str, Any]:
        """SSM configuration block ({"imports": {...}, "exports": {...}})"""
        return self.section("ssm")

    @property
    def ssm_exports(self) -> Dict[str, str]:
        """
        Get the SSM parameter paths for values this resource exports.

        For example:
        {
            "cluster_endpoint": "/my-app/db/endpoint",
            "port": "/my-app/db/port"
        }

        Returns:
            Dictionary mapping attribute names to SSM parameter paths for export
        """
        return self.ssm.get("exports", {})

    @property
    def ssm_imports(self) -> Dict[str, str]:
        """
        Get the SSM parameter paths for values this resource imports.

        Returns:
            Dictionary mapping attribute names to SSM parameter paths for import
        """
        return self.ssm.get("imports", {})
