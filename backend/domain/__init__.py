"""
Domain Layer

This package contains the ownership domain model, separated from
persistence concerns and infrastructure.

Structure:
- entities/: OwnershipRecord, identified by its (owner, vehicle) pair
- value_objects/: OwnershipPeriod, the validated date window
"""
