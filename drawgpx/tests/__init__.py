"""Test suite for the DrawGPX shape-to-route pipeline."""
