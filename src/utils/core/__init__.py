# Core utilities package
# Contains foundational infrastructure utilities for the application
