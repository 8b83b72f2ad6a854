"""Arch Linux UEFI installer (Python-first, fail-fast).

Core design goals:
- Validate everything before touching the disk
- One linear pipeline, stop at the first failure
- Explicit confirmation before destructive steps
- External tools do the work; we only orchestrate them
- Centralized logging
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
