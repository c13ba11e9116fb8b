"""Output layer: terminal shell and ServiceResult formatting."""
