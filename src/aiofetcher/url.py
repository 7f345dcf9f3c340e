from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Union

from multidict import MultiDict, MultiDictProxy
from yarl import URL

PathParam = Union[str, int, float]
SearchParam = Union[
    None, str, int, float, Sequence[Union[None, str, int, float]]
]

# placeholders start with a letter or underscore so ports like :3000 are kept
_PLACEHOLDER = re.compile(r":([A-Za-z_]\w*)")


@dataclass(frozen=True)
class AnalyzedUrl:
    pathname: str
    search_params: MultiDictProxy[str]
    hash: Optional[str]
    path_params: Optional[Dict[str, str]] = None


def _to_url(url: Union[str, URL]) -> URL:
    return url if isinstance(url, URL) else URL(url)


def generate_url(template: str, params: Mapping[str, PathParam]) -> str:
    """
    Replace the `:name` placeholders in `template` with values from `params`.

    >>> generate_url("http://localhost:3000/:id", {"id": 1})
    'http://localhost:3000/1'

    Raises KeyError if a placeholder has no value.
    """
    return _PLACEHOLDER.sub(lambda match: str(params[match.group(1)]), template)


def generate_search_params(params: Mapping[str, SearchParam]) -> str:
    """
    Build a query string from `params`, including the leading `?`.

    None values are skipped, sequence values repeat the key. Returns an empty
    string if nothing remains.
    """
    query: MultiDict[Union[str, int, float]] = MultiDict()
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                if item is not None:
                    query.add(key, item)
        else:
            query.add(key, value)
    if not query:
        return ""
    return f"?{URL.build(query=query).raw_query_string}"


def extract_pathname(url: Union[str, URL]) -> str:
    return _to_url(url).path


def extract_search_params(url: Union[str, URL]) -> MultiDictProxy[str]:
    return _to_url(url).query


def extract_hash(url: Union[str, URL]) -> Optional[str]:
    return _to_url(url).fragment or None


def analyze_url(url: Union[str, URL], template: Optional[str] = None) -> AnalyzedUrl:
    """
    Split `url` (absolute or a bare path) into pathname, query and fragment.

    If `template` is given, each `:name` segment of it is matched against
    the segment at the same position of the pathname.
    """
    parsed = _to_url(url)
    pathname = parsed.path
    path_params: Optional[Dict[str, str]] = None
    if template is not None:
        segments = pathname.split("/")
        path_params = {}
        for index, part in enumerate(template.split("/")):
            if part.startswith(":") and index < len(segments):
                path_params[part[1:]] = segments[index]
    return AnalyzedUrl(
        pathname=pathname,
        search_params=parsed.query,
        hash=parsed.fragment or None,
        path_params=path_params,
    )
