"""Application use cases."""

from .get_temporary_credentials import GetCredentialsRequest, GetCredentialsResult, GetTemporaryCredentials
from .manage_apps import AppSummary, ListApps, SelectApp

__all__ = [
    "AppSummary",
    "GetCredentialsRequest",
    "GetCredentialsResult",
    "GetTemporaryCredentials",
    "ListApps",
    "SelectApp",
]
