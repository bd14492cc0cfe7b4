"""Repositories — the query engine, mutation engine, and provisioning path."""

from followctl.infrastructure.repositories.mutation import MutationRepository
from followctl.infrastructure.repositories.provisioning import ProvisioningRepository
from followctl.infrastructure.repositories.query import QueryRepository

__all__ = [
    "MutationRepository",
    "ProvisioningRepository",
    "QueryRepository",
]
