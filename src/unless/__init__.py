"""unless — skip a middleware for requests that match configured rules.

All public types are exported from this module for flat imports:

    from unless import attach, unless, UnlessConfig, PathPattern
"""

__version__ = "0.1.0"

from unless._config import (
    ConfigParseError,
    PathLiteral,
    PathMatcher,
    PathPattern,
    UnlessConfig,
    as_tuple,
    load_unless_config,
    parse_unless_config,
)
from unless._predicate import (
    CustomPredicate,
    Or,
    Predicate,
    SinglePredicate,
    or_predicate,
)
from unless._string_matchers import (
    CompiledRegexMatcher,
    ExactMatcher,
    MatcherError,
    RegexMatcher,
    SuffixMatcher,
)
from unless._types import (
    ContextLike,
    CustomFn,
    DataInput,
    Handler,
    InputMatcher,
    MatchingData,
    Next,
    RequestContext,
)
from unless._unless import Unless, attach, unless

__all__ = [
    # Entry points
    "attach",
    "unless",
    "Unless",
    # Protocols and aliases
    "ContextLike",
    "CustomFn",
    "DataInput",
    "Handler",
    "InputMatcher",
    "MatchingData",
    "Next",
    "RequestContext",
    # Predicates
    "CustomPredicate",
    "Or",
    "Predicate",
    "SinglePredicate",
    "or_predicate",
    # Concrete matchers
    "CompiledRegexMatcher",
    "ExactMatcher",
    "MatcherError",
    "RegexMatcher",
    "SuffixMatcher",
    # Config
    "ConfigParseError",
    "PathLiteral",
    "PathMatcher",
    "PathPattern",
    "UnlessConfig",
    "as_tuple",
    "load_unless_config",
    "parse_unless_config",
]
