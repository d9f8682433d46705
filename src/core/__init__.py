"""Shared building blocks used across pathscan subsystems."""
