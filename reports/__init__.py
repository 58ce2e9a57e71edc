"""
Reports Module

Output rounding, insight text and CSV export.
"""
