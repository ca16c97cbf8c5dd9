"""Application bootstrap and configuration persistence."""
