"""Data source adapters, one per Prefect Cloud entity type.

Public API (the "studs"):
    DATA_SOURCES: Built-in data source classes
"""

from .account import AccountDataSource
from .account_member import AccountMemberDataSource
from .account_role import AccountRoleDataSource
from .service_account import ServiceAccountDataSource
from .team import TeamDataSource
from .variable import VariableDataSource
from .work_pool import WorkPoolDataSource
from .work_queue import WorkQueueDataSource
from .worker_metadata import WorkerMetadataDataSource
from .workspace import WorkspaceDataSource
from .workspace_role import WorkspaceRoleDataSource

DATA_SOURCES: list[type] = [
    AccountDataSource,
    AccountMemberDataSource,
    AccountRoleDataSource,
    ServiceAccountDataSource,
    TeamDataSource,
    VariableDataSource,
    WorkPoolDataSource,
    WorkQueueDataSource,
    WorkerMetadataDataSource,
    WorkspaceDataSource,
    WorkspaceRoleDataSource,
]

__all__ = [
    "DATA_SOURCES",
    "AccountDataSource",
    "AccountMemberDataSource",
    "AccountRoleDataSource",
    "ServiceAccountDataSource",
    "TeamDataSource",
    "VariableDataSource",
    "WorkPoolDataSource",
    "WorkQueueDataSource",
    "WorkerMetadataDataSource",
    "WorkspaceDataSource",
    "WorkspaceRoleDataSource",
]
