"""Foundation layer: Result container, error hierarchy, configuration."""
