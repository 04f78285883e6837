"""JSON input/output for rooms."""
