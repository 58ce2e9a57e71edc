"""
Storage Module

Typed dataset records and the dataset registry.
"""
