"""Domain layer — builder engine, rule tables, problems, and built models.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, output, or config.
"""
