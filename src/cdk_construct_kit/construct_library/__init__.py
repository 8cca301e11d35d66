"""Reusable constructs (RDS clusters, CodePipeline actions)."""
