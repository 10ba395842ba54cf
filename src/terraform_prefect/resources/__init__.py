"""Resource adapters, one per manageable Prefect Cloud entity type.

Public API (the "studs"):
    RESOURCES: Built-in resource classes
"""

from .service_account import ServiceAccountResource
from .variable import VariableResource
from .work_pool import WorkPoolResource
from .work_queue import WorkQueueResource
from .workspace import WorkspaceResource
from .workspace_access import WorkspaceAccessResource
from .workspace_role import WorkspaceRoleResource

RESOURCES: list[type] = [
    ServiceAccountResource,
    VariableResource,
    WorkPoolResource,
    WorkQueueResource,
    WorkspaceResource,
    WorkspaceAccessResource,
    WorkspaceRoleResource,
]

__all__ = [
    "RESOURCES",
    "ServiceAccountResource",
    "VariableResource",
    "WorkPoolResource",
    "WorkQueueResource",
    "WorkspaceResource",
    "WorkspaceAccessResource",
    "WorkspaceRoleResource",
]
