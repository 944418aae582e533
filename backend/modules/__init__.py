"""
Feature modules for the Gatehouse backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's collaborators
- models.py: Pydantic models for records and data transfer
- service.py: Business logic implementation
- store.py / repository.py: In-memory and Supabase storage
- routes.py: FastAPI route handlers, where the module exposes any
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
