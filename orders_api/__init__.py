"""Order pricing service."""
