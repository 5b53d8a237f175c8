"""
Ingest Admin - Lock Transition Control Path

Admin-side control path of an ingestion pipeline. Moves an inbound data
directory into the locked state with an atomic rename and records the
outcome so an interrupted transition can be resumed safely.
"""

__version__ = "0.1.0"
__author__ = "Ingest Team"
