"""Threading utilities for sizing the batch evaluation pool."""

import os
import sys
from typing import Dict, Any, Optional


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with the GIL disabled (3.13+ free-threading)."""
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    return is_gil_enabled is not None and not is_gil_enabled()


def get_python_threading_mode() -> str:
    """Describe the current threading mode."""
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    if is_gil_enabled is None:
        return "GIL-enabled (Python < 3.13)"
    return "GIL-enabled" if is_gil_enabled() else "free-threading"


def get_optimal_worker_count(user_specified: Optional[int] = None, batch_size: Optional[int] = None) -> int:
    """Calculate a worker count from threading mode, CPU count and batch size.

    Args:
        user_specified: User-specified worker count, if provided
        batch_size: Number of items to process; never use more workers than items

    Returns:
        Number of workers, at least 1
    """
    if user_specified is not None and user_specified > 0:
        workers = user_specified
    else:
        cpu_count = os.cpu_count() or 1
        if is_free_threading_enabled():
            # True parallelism: cap at 64 to avoid excessive overhead
            workers = min(64, cpu_count * 2)
        else:
            workers = min(32, cpu_count + 4)

    if batch_size is not None:
        workers = min(workers, max(1, batch_size))
    return workers


def get_threading_info() -> Dict[str, Any]:
    """Get information about the Python threading configuration."""
    return {
        "mode": get_python_threading_mode(),
        "free_threading": is_free_threading_enabled(),
        "cpu_count": os.cpu_count() or 1,
        "optimal_workers": get_optimal_worker_count(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }
