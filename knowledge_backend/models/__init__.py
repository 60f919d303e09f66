"""API and domain schemas."""
