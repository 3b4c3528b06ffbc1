"""
Shared helpers: serialization, validation, security and FastAPI dependencies.
"""
