"""Core: configuration, constants, and engine lifespan."""
