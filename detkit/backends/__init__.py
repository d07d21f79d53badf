"""
Inference backends for detkit.

Kept in a separate module so decoding and NMS stay usable without an
inference runtime installed.
"""

from __future__ import annotations

__all__ = []
