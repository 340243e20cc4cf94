"""Campus data access."""
