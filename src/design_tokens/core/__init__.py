"""Core token pipeline: IR, loading, resolution, projection, validation and versioning."""
