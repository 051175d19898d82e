"""Hannah.health meal planning tools."""
