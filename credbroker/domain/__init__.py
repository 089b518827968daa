"""Domain layer - credentials, apps and providers."""
