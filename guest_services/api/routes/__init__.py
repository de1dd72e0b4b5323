"""Route Modules - one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes validate with core/ rules and delegate persistence to injected clients
"""
