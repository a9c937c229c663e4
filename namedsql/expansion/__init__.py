from namedsql.expansion.whitelist import (
    DispatchNode,
    Dispatcher,
    ExpansionLeaf,
    WhitelistBranch,
    build_dispatch_tree,
    build_query_tree,
    check_fully_expanded,
    count_expansions,
    dispatch,
    expand_query,
    substitute_first,
)

__all__ = [
    "DispatchNode",
    "Dispatcher",
    "ExpansionLeaf",
    "WhitelistBranch",
    "build_dispatch_tree",
    "build_query_tree",
    "check_fully_expanded",
    "count_expansions",
    "dispatch",
    "expand_query",
    "substitute_first",
]
