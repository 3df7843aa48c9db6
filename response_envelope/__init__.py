"""Standard operation-result envelopes for API responses."""

from response_envelope.schemas.envelope import DynamicEnvelope, Envelope

__all__ = ["DynamicEnvelope", "Envelope"]

__version__ = "0.1.0"
