"""Dashboard-related exceptions."""

from app.exceptions.base import AppException


class DashboardUnavailableError(AppException):
    """One of the dashboard reads failed, so no snapshot could be built."""

    def __init__(self, query: str | None = None):
        """
        Initialize the error, optionally naming the read that failed.

        Parameters:
            query (str | None): Name of the failed read, kept on the instance as `query`. It is not part of the message returned to clients.
        """
        self.query = query
        super().__init__("Dashboard data is temporarily unavailable")
