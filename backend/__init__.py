"""What-if projection engine and its Flask API."""
