"""Top-level package for the property geocoding service.

Forward and reverse geocoding for the real-estate listing site, served
over HTTP with per-direction caching, rate limiting and a fixed fallback
location in Reconquista, Santa Fe.
"""
