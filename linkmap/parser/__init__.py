"""linkmap.parser: HTML parsing and anchor extraction."""
