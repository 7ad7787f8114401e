"""Domain layer: pure record types, identifiers, and enums.

No imports from infrastructure, services, or api.
"""
