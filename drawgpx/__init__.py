"""DrawGPX: draw a shape, get a road-following GPX route of a chosen length."""
