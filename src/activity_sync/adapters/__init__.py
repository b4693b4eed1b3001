"""Infrastructure adapters for the activity-sync domain ports."""
