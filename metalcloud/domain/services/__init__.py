"""
Domain Services Package

Pure functions over domain objects: providerID parsing and metadata projection.
"""

from metalcloud.domain.services.identifier_parser import parse_provider_id
from metalcloud.domain.services.metadata_projector import project_metadata

__all__ = [
    "parse_provider_id",
    "project_metadata",
]
