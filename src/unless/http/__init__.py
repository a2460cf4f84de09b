"""unless.http — request-side types.

Provides the HttpRequest descriptor, the normalized RequestView that
predicates evaluate against, and the DataInputs that read it.
"""

from unless.http._inputs import MethodInput, PathInput
from unless.http._request import HttpRequest, RequestView, context_field, parse_path

__all__ = [
    # Context
    "HttpRequest",
    "RequestView",
    "context_field",
    "parse_path",
    # DataInputs
    "PathInput",
    "MethodInput",
]
