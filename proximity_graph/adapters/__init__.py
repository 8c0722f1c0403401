"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces that
connect the graph engine to external libraries:
- Rendering engines (Folium)
"""
