"""Feedback collector -- form submissions in a JSON file, with a Basic-Auth admin view."""

__version__ = "0.1.0"
