"""
Feature modules for the Wedding Portal backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py: Business logic implementation
- routes.py: FastAPI route handlers
- exceptions.py: Module-specific exceptions

Every module reads and writes portal data through the persistence
gateway, never through the Supabase client directly.
"""
