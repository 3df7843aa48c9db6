"""Pydantic schemas for operation results."""

from .envelope import DynamicEnvelope, Envelope  # noqa: F401
