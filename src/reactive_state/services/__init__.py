"""Services - history tracking, scheduling and settings persistence."""
