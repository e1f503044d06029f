"""Gateway configuration model and backend route extraction."""
