"""Shared interfaces and value objects used by controller and renderers."""
