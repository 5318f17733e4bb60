"""
Pipeline module for Vinyl Chart.

Contains the orchestration logic for the four-phase chart pipeline.
"""

from .orchestrator import VinylChartPipeline, main_pipeline

__all__ = [
    'VinylChartPipeline',
    'main_pipeline',
]
