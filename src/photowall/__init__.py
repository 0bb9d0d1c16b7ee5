"""Curved parallax photo wall: geometry, tile assignment and animation engine."""
