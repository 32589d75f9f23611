"""Router configuration.

RouterConfig is a frozen dataclass, immutable once created, so a router
cannot change behavior after construction.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have conservative defaults. Override what you need::

        config = RouterConfig(ignore_trailing_slash=True, unquote_params=True)
    """

    # Matching
    ignore_trailing_slash: bool = False  # "/users/" matches a route declared as "/users"

    # Parameters
    unquote_params: bool = False  # Percent-decode captured values ("a%20b" -> "a b")

    # Query string
    parse_query: bool = True
    keep_blank_query_values: bool = True  # "?flag" yields {"flag": ""}
