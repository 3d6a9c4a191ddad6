"""Core building blocks: configuration, secret resolution and resilience."""
