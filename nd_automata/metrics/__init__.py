"""Metrics layer: spatial statistics of one grid and temporal analysis of sampled series."""
