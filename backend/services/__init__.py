"""
Service layer: validation rules and name-driven ownership workflows.
"""
