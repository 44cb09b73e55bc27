"""Domain layer: value models, identifiers, and pagination rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
