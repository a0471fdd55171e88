"""Domain layer: preference types, descriptors, validation, and tag sets.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
