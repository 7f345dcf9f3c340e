import sys

# cannot use try/except ImportError or mypy fails
if sys.version_info >= (3, 10):
    from typing import TypeGuard
else:
    from typing_extensions import TypeGuard

__all__ = ("TypeGuard",)
