"""
MicroGravity Core - Shared namespace and bootstrap.

This module contains:
- Namespace: the shared runtime object published as t / Titan
- BootLog: verbose-gated message sink
- bootstrap: discovery, ordering and activation entry point
"""

__all__ = []
