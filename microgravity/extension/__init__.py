"""
MicroGravity Extension System - Finding, ordering and activating extensions.

This module handles:
- titan.json parsing
- node_modules discovery
- Dependency ordering
- Native binding and entry module execution
"""

__all__ = []
