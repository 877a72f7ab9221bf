"""SlideScript backend services."""
