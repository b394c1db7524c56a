"""Read-only view of the permission catalog."""
