"""
================================================================================
MongoDB Tools Module
================================================================================

Connection handling for the deployment the documentation examples run
against.

Exports:
    - ConnectionDescriptor: URI, database and replica set of the deployment
    - DeploymentHandle: pymongo client wrapper with idempotent release
    - open_deployment: builds a general or replica-set-capable handle

================================================================================
"""

from .deployment import ConnectionDescriptor, DeploymentHandle, open_deployment

__all__ = [
    "ConnectionDescriptor",
    "DeploymentHandle",
    "open_deployment",
]
