"""Service layer: business logic returning ServiceResult."""
