"""Shared logging, environment and constants for qa-kit."""
