"""Infrastructure layer: filesystem-backed collaborators and process control."""
