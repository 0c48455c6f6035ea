"""
Core business infrastructure: domain errors, the transaction primitive and model helpers.
"""
