"""Service layer: bundle operations returning ServiceResult."""
