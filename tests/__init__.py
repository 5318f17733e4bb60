"""
Vinyl Chart Test Suite

This package contains unit tests, integration tests, and fixtures
for the Vinyl Chart pipeline.

Run tests with:
    pytest tests/
    pytest tests/test_geometry.py -v
    pytest tests/test_layers.py::TestLayerOrder -v
"""

__version__ = "1.0.0"
