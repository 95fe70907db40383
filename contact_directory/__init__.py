"""Employee emergency-contact directory service."""
