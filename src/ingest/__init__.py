"""Geometry ingestion pipeline.

This module reads tabular, shapefile, and JSON sources in order and
normalizes them into named feature collections for topology assembly.
"""
