"""Bluebikes traffic map - station traffic overlay for Boston/Cambridge."""

__version__ = "0.1.0"
