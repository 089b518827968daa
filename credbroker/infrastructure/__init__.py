"""Infrastructure layer - adapters and settings."""
