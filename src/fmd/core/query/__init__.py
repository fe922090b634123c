"""
Query Package for fmd.

This package turns filter specifications into an immutable Query and
evaluates it against one file's metadata.

Modules:
    predicates: Predicate kinds and stateless matchers
    types: FilterSpec, PredicateGroup and Query
    builder: Query construction and usage-error validation
    evaluator: Per-file OR-within-kind / AND-across-kinds evaluation

Usage:
    from fmd.core.query import build_query, evaluate

    query = build_query(["tag=work", "title=meeting"])
    matched = evaluate(query, "notes/a.md")
"""

from .predicates import (
    PredicateKind,
    Predicate,
    TagPredicate,
    TitlePredicate,
    NamePredicate,
    AuthorPredicate,
    FieldPredicate,
    DateRangePredicate,
)

from .types import FilterSpec, PredicateGroup, Query

from .builder import build_predicate, build_query, parse_boundary_date

from .evaluator import QueryEvaluator, evaluate

__all__ = [
    # Predicates
    "PredicateKind",
    "Predicate",
    "TagPredicate",
    "TitlePredicate",
    "NamePredicate",
    "AuthorPredicate",
    "FieldPredicate",
    "DateRangePredicate",
    # Types
    "FilterSpec",
    "PredicateGroup",
    "Query",
    # Construction and evaluation
    "build_predicate",
    "build_query",
    "parse_boundary_date",
    "QueryEvaluator",
    "evaluate",
]
