"""Offline Monte-Carlo path tracer with a BVH-accelerated scene."""

__version__ = "0.1.0"
