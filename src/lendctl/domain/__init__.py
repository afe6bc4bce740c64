"""Domain layer — loan types, invariants, and the registry aggregate.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
