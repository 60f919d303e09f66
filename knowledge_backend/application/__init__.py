"""Application layer: orchestration services used by the API routers."""
