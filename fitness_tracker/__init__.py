"""Quarterly fitness assessment tracking."""
