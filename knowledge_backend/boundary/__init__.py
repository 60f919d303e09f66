"""Boundary layer: adapters for external systems (vector stores, embedding SDKs)."""
