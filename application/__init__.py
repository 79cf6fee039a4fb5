"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing the catalog seeding workflow.
"""

from application.ingestion import IngestionResult, run_if_empty

__all__ = [
    "run_if_empty",
    "IngestionResult",
]
