"""In-car navigation session with dual map surfaces."""
