"""Domain layer — node tree, documents, directives, matching.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
