"""HTML parsing and selector-based URL extraction."""
