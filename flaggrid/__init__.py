"""Flag grid reader: extracts a 3x3 grid of country flags from a screenshot."""
