"""Internal utilities for lineage."""
