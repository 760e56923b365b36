"""Session item ingestion and aggregation.

This package reads session table items from DynamoDB or a local dump
and folds them into per-session lifecycle stats.
"""
