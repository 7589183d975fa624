"""Browser-flavoured fetch helpers on top of HTTPX."""

__version__ = "0.3.0"

from ifetch._defaults import DEFAULT_HEADERS, DEFAULT_OPTIONS
from ifetch._request_builder import PreparedRequest, prepare_request
from ifetch._response_parser import aparse_json, parse_json
from ifetch.async_client import AsyncFetcher
from ifetch.client import Fetcher
from ifetch.config import BaseConfig, RequestConfig
from ifetch.exceptions import (
    IFetchError,
    InvalidOptionError,
    InvalidURL,
    ParseError,
    SerializationError,
    TransportError,
    TransportTimeoutError,
)
from ifetch.merge import classify, is_plain_object, merge
from ifetch.providers import CallableDefaults, StaticDefaults
from ifetch.types import UNSET, DefaultsProvider, HTTPMethod, ValueKind
from ifetch.urls import append_search_params, http_build_query, merge_url, to_url

ifetch = AsyncFetcher()
fetch = Fetcher()

__all__ = [
    "__version__",
    "ifetch",
    "fetch",
    "AsyncFetcher",
    "Fetcher",
    "BaseConfig",
    "RequestConfig",
    "DEFAULT_HEADERS",
    "DEFAULT_OPTIONS",
    "PreparedRequest",
    "prepare_request",
    "parse_json",
    "aparse_json",
    "merge",
    "classify",
    "is_plain_object",
    "merge_url",
    "to_url",
    "append_search_params",
    "http_build_query",
    "DefaultsProvider",
    "StaticDefaults",
    "CallableDefaults",
    "UNSET",
    "ValueKind",
    "HTTPMethod",
    "IFetchError",
    "InvalidURL",
    "InvalidOptionError",
    "SerializationError",
    "ParseError",
    "TransportError",
    "TransportTimeoutError",
]
