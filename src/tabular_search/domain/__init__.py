"""Domain value objects for row search."""
