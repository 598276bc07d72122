"""Document listing, upload and lifecycle feature."""
