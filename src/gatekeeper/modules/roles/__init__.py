"""Role management: CRUD and role to permission links."""
