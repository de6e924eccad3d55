"""
Services package for the Boat Dealer Portal.
Contains repository classes for database access and the portal's domain services.
"""

from services.catalog_repository import CatalogRepository
from services.content_repository import ContentRepository
from services.dealer_tools_repository import DealerToolsRepository
from services.dealers_repository import DealersRepository
from services.sales_repository import SalesRepository
from services.service_repository import ServiceRepository
from services.settings_repository import SettingsRepository

__all__ = [
    'CatalogRepository',
    'ContentRepository',
    'DealerToolsRepository',
    'DealersRepository',
    'SalesRepository',
    'ServiceRepository',
    'SettingsRepository'
]
