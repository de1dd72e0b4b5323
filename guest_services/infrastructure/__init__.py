"""Infrastructure Layer - database, request store, attachment storage, logging.

Invariants:
    - Infrastructure imports core/ rules and errors, never api/
    - Every external failure is mapped to StorageError before leaving this layer
"""
