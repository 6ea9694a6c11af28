"""Journey service API client."""
