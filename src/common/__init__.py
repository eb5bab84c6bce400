"""Shared helpers: logging, filesystem lookups and process execution."""
