"""
Ingestion module for multipart meme submissions.
"""

from .pipeline import ingestion_pipeline, IngestionPipeline

__all__ = ["ingestion_pipeline", "IngestionPipeline"]
