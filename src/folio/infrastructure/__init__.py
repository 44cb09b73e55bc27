"""Infrastructure layer: database, uploads directory, repositories.

This layer depends on stdlib, the domain layer, config models, and SQLAlchemy.
It must never import from services, commands, or output.
The service layer bridges between callers and infrastructure.
"""
