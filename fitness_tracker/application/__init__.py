"""Application layer contracts."""
