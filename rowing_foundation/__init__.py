"""Foundation package for rowing stroke segmentation and training metrics.

Modules:
- io: Locating and resolving per-stroke data in session exports
- models: Typed domain objects
- recognition: Work/rest classification and block segmentation
- metrics: Block, efficiency and recovery metrics
- storage: CSV export helpers
- pipeline: Per-session analysis driver
- cli: Command line interface
"""

__all__ = [
    "io",
    "models",
    "recognition",
    "metrics",
    "storage",
    "pipeline",
    "cli",
]
