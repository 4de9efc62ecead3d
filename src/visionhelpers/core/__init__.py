"""
Core modules for visionhelpers.

This package contains:
- Configuration management
- Request types for batch_annotate_images
- Image reference normalization and batch construction
- The per-feature helper registry and client facade
"""
