"""Core Layer - domain types, validation rules and errors. No IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
"""
