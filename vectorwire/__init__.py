"""vectorwire: binary codecs for pgvector column types.

The asyncpg adapter lives in :mod:`vectorwire.db` and is imported on its own.
"""
from .errors import *  # noqa: F401,F403
from .vector import *  # noqa: F401,F403
from .halfvec import *  # noqa: F401,F403
from .sparsevec import *  # noqa: F401,F403
from .bit import *  # noqa: F401,F403
from .distance import *  # noqa: F401,F403
from .registry import *  # noqa: F401,F403

__all__ = [name for name in globals() if not name.startswith("_")]
