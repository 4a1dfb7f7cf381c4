"""Shared enums of the typefile syntax."""
