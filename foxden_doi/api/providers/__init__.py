"""DOI providers, registered by name."""

from foxden_doi.api.providers.base import (
    DOIProvider,
    ProviderResult,
    available_providers,
    dispatch,
    get_provider,
    register_provider,
)
from foxden_doi.api.providers.datacite import DataCiteProvider
from foxden_doi.api.providers.materialcommons import MaterialsCommonsProvider
from foxden_doi.api.providers.zenodo import ZenodoProvider

__all__ = [
    'DOIProvider', 'ProviderResult', 'available_providers', 'dispatch', 'get_provider',
    'register_provider',
    'DataCiteProvider', 'MaterialsCommonsProvider', 'ZenodoProvider',
]
