"""Infrastructure: SQLModel persistence for the store contracts."""
