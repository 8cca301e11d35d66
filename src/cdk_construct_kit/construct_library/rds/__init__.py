"""
RDS Construct Library

Constructs for provisioned, serverless and imported database clusters.
"""

from .cluster import (
    BaseCluster,
    DatabaseCluster,
    DatabaseClusterAttributes,
    ImportedDatabaseCluster,
    ServerlessCluster,
)
from .endpoint import Endpoint

__all__ = [
    "BaseCluster",
    "DatabaseCluster",
    "DatabaseClusterAttributes",
    "Endpoint",
    "ImportedDatabaseCluster",
    "ServerlessCluster",
]
