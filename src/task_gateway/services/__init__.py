"""Ingestion and aggregation services."""
