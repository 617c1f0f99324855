"""Relational backend protocol.

The backend is a black box reached over RPC: dynamic SQL only ever runs
through a named stored procedure.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SqlBackend(Protocol):
    """Protocol for the remote relational engine."""

    async def call_procedure(self, name: str, params: dict[str, Any]) -> Any:
        """Invoke a stored procedure by name.

        Args:
            name: Procedure name (e.g. ``execute_sql``)
            params: Named parameters

        Returns:
            The decoded procedure result (list, JSON string, or None)

        Raises:
            BackendError: If the database rejects or fails the call
        """
        ...

    async def select_rows(self, table: str, limit: int) -> list[dict[str, Any]]:
        """Fetch up to ``limit`` rows from a table or view."""
        ...

    async def health_check(self) -> bool:
        """Check if the backend is reachable."""
        ...
