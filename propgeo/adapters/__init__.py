"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Geocoding services (Nominatim via geopy)
- Caching (in-memory TTL cache, null cache)
- Rate limiting (minimum interval between calls)
"""
