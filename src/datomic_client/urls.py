"""
Path building for the REST peer.

Layout served by the peer:
    {base}/data/{storage}/                  create database
    {base}/data/{storage}/{db}/{t}/         database info
    {base}/data/{storage}/{db}/             transact
    {base}/data/{storage}/{db}/{t}/datoms   datoms / index-range
    {base}/data/{storage}/{db}/{t}/entity   entity
    {base}/api/query                        query
    {base}/events/{storage}/{db}            event stream
"""

from typing import Any

# Version segment meaning "most recent database value"
LATEST = "-"


def join_url(base: str, *parts: Any) -> str:
    """
    Join `base` and `parts` with '/'.

    None and empty parts are dropped so an unset storage alias never
    leaves an empty segment behind. A trailing '/' on base is ignored.
    """
    segments = [base.rstrip("/")]
    segments.extend(str(part) for part in parts if part is not None and part != "")
    return "/".join(segments)


def root_url(base: str, *parts: Any) -> str:
    return join_url(base, *parts)


def db_url(base: str, storage, dbname: str, *parts: Any) -> str:
    return root_url(base, "data", storage, dbname, *parts)
