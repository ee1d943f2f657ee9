"""
Shared helpers: code normalization, templates, prices, link tracking.
"""
