"""Calendar grid, classification and report assembly."""
