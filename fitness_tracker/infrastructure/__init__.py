"""Adapters for persistence and configuration."""
