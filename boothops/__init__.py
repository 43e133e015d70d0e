"""Booth Ops: per-booth usage limiting and audit service for the school festival."""
