"""terraform-prefect - Prefect Cloud data sources and resources.

Translates declarative data source and resource blocks into calls against the
Prefect Cloud REST API and maps the results back into state.

Key components:
    - PrefectClient: Facade returning account/workspace scoped sub-clients
    - PrefectProvider: Provider-level schema and configuration
    - AdapterRegistry: Maps type names to data source and resource adapters
    - CLI: Runs adapters directly against the API

Quick start:
    # Configure credentials
    export PREFECT_API_KEY=pnu_...
    export PREFECT_CLOUD_ACCOUNT_ID=<account uuid>

    # Inspect and read
    tfprefect types
    tfprefect read workspace -a name=prod
"""

__version__ = "0.1.0"

from .provider import PrefectProvider  # noqa: E402
from .registry import AdapterRegistry  # noqa: E402

__all__ = [
    "PrefectProvider",
    "AdapterRegistry",
    "__version__",
]
