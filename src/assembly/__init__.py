"""Output assembly layer.

This module validates output options and drives the external topology
pipeline over the named geometry sources produced by ingestion.
"""
