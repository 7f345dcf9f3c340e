import logging
from typing import Dict, Mapping, Optional, TypeVar

from .types import Method

T = TypeVar("T")


logger = logging.getLogger("aiofetcher")


def merge(
    defaults: Mapping[str, T], overrides: Optional[Mapping[str, T]]
) -> Dict[str, T]:
    """
    Shallow merge of two mappings, values in `overrides` win.
    """
    if not overrides:
        return dict(defaults)
    return {**defaults, **overrides}


def method_name(method: Method) -> str:
    # str() of an HttpMethod member gives "HttpMethod.get", not "GET"
    return getattr(method, "value", method)
