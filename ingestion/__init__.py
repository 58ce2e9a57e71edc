"""
Data Ingestion Module

Turns raw dataset payloads and the synthetic catalog into typed records:
- JSON-style upload payloads (validated and normalized)
- Seeded synthetic marine and oceanographic series
"""

__version__ = "0.1.0"
