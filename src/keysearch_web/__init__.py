"""Flask front end for the fuzzy key search engine."""
from .web import app, main

__all__ = ["app", "main"]
