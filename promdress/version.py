"""
Version management for promdress.
"""

import platform
import sys
from typing import Any, Dict

# Current version
__version__ = "0.1.0"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# Exposition format produced by CollectorRegistry.report()
EXPOSITION_FORMAT_VERSION = "0.0.4"

PYTHON_MIN_VERSION = (3, 8)


def get_version() -> str:
    """Get the version string."""
    return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"


def check_python_compatibility() -> bool:
    """Check if the running interpreter is supported."""
    return sys.version_info[:2] >= PYTHON_MIN_VERSION


def get_build_info() -> Dict[str, Any]:
    """
    Get build information.

    Returns:
        Dictionary containing version metadata

    Example:
        from promdress.version import get_build_info
        info = get_build_info()
        print(f"Exposition format: {info['exposition_format']}")
    """
    return {
        "version": get_version(),
        "exposition_format": EXPOSITION_FORMAT_VERSION,
        "python_version": platform.python_version(),
        "python_compatible": check_python_compatibility(),
        "min_python": f"{PYTHON_MIN_VERSION[0]}.{PYTHON_MIN_VERSION[1]}",
    }


def print_version_info() -> None:
    """Print version information to stdout."""
    info = get_build_info()

    print("=" * 50)
    print("promdress Version Info")
    print("=" * 50)
    print(f"Version: {info['version']}")
    print(f"Exposition format: {info['exposition_format']}")
    print(f"Python: {info['python_version']} (requires {info['min_python']}+)")
    print("=" * 50)


VERSION = __version__
VERSION_TUPLE = (VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)
