"""Shared utilities: environment configuration."""
