"""
Domain layer for the IT asset registry.
Contains prefix derivation, code allocation, relocation and invoice rules
separated from data persistence concerns.
"""
