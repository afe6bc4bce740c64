"""Infrastructure layer — SQLite ledger storage and collaborator adapters.

Depends on stdlib, SQLAlchemy, and the domain models. It must never
import from services, commands, or output.
"""
