"""
querystring-parser: MongoDB-style querystring filters to predicate trees.

Example:
    from querystring_parser import parse_mongo_filter

    result = parse_mongo_filter("filter[age][gt]=10&filter[name]=mike")
    result.results.to_dict()
    # {"AND": [{">": ["#age", 10]}, {"ilike": ["#name", "%mike%"]}]}
"""

from __future__ import annotations

from .config import DEFAULT_CONFIG, ParserConfig
from .exceptions import QuerystringParsingError
from .filters import AndPredicate, FieldPredicate, Predicate, UnaryPredicate, combine
from .include import IncludeResult, parse_include
from .mongo_filter import FilterField, ParseResult, extract_filter_fields, parse_mongo_filter
from .querystring import parse_params
from .types import MongoOperator, ParsingErrorType, SqlOperator, ValueType

__version__ = "0.3.0"

__all__ = [
    "DEFAULT_CONFIG",
    "AndPredicate",
    "FieldPredicate",
    "FilterField",
    "IncludeResult",
    "MongoOperator",
    "ParseResult",
    "ParserConfig",
    "ParsingErrorType",
    "Predicate",
    "QuerystringParsingError",
    "SqlOperator",
    "UnaryPredicate",
    "ValueType",
    "__version__",
    "combine",
    "extract_filter_fields",
    "parse_include",
    "parse_mongo_filter",
    "parse_params",
]
