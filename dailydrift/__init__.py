"""dailydrift Python package.

Public API:
  - import from `dailydrift.api` (preferred) or `import dailydrift` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)
