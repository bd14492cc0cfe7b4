"""Infrastructure layer — database, repositories, and the Store.

This layer depends on stdlib, SQLAlchemy, and Alembic, plus the domain
layer for entity shapes and typed outcomes. It must never import from
services, commands, or output.
"""
