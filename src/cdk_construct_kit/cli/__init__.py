"""Command line interface (``cdk-kit``)."""
