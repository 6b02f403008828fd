"""Static site build pipeline with a live-reload development server."""

__version__ = "0.1.0"
