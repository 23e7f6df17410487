"""Terminal output formatting."""
