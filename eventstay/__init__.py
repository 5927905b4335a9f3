"""Hotel room booking for event participants."""
