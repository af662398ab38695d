"""Models - reactive values and plain data without UI dependencies."""
