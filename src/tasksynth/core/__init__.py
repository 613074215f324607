"""
Core synthesis logic: rules, AI generation, fallback and post-processing.
"""
