"""Shipment tracking screen backend: place selection, map camera and driving route."""

__version__ = "1.0.0"
