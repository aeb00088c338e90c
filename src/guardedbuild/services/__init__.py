"""Service layer — drives builders on behalf of callers, returning ServiceResult.

Services may import from the domain layer.
They must never import from commands or output.
"""
