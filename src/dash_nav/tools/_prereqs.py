"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, candidates: bool = False, route: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(app.session.state, route=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if candidates and not state.candidates:
        raise ValueError(
            "No search results pending. Search first with search_destination."
        )
    if route and not state.has_route:
        raise ValueError(
            "No active route. Plan one with select_destination or go_to_favorite."
        )
