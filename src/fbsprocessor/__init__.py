"""Post-processor for FlatBuffers generated Go sources."""

__version__ = "1.0.0"
