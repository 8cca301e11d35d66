"""
Connection endpoint of a database cluster or instance
Maintainers: Eric Wilson
MIT License. See Project Root for license information.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Endpoint:
    """
    A hostname and port pair.

    Both values are usually CloudFormation tokens resolved at deploy time.
    """

    hostname: str
    port: Union[str, int]

    @property
    def socket_address(self) -> str:
        """The "hostname:port" form of the endpoint"""
        return f"{self.hostname}:{self.port}"
