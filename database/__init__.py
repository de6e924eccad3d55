"""
Database package for the Boat Dealer Portal.
Provides SQLAlchemy models, connection management, and session handling.
"""

from database.connection import (
    Base,
    DatabaseNotConfiguredError,
    configure_database,
    get_db_session,
    init_db,
    check_db_connection,
    is_db_configured
)

from database.models import (
    Dealer,
    Quote,
    Order,
    ServiceRequest,
    ServiceMessage,
    BoatModel,
    EnginePackage,
    HullColor,
    UpholsteryPackage,
    AdditionalOption,
    DealerPricing,
    DealerInventory,
    BoatSale,
    FactoryProduction,
    MarketingContent,
    MarketingManual,
    MarketingWarranty,
    AdminSetting
)

__all__ = [
    # Connection
    'Base',
    'DatabaseNotConfiguredError',
    'configure_database',
    'get_db_session',
    'init_db',
    'check_db_connection',
    'is_db_configured',
    # Models
    'Dealer',
    'Quote',
    'Order',
    'ServiceRequest',
    'ServiceMessage',
    'BoatModel',
    'EnginePackage',
    'HullColor',
    'UpholsteryPackage',
    'AdditionalOption',
    'DealerPricing',
    'DealerInventory',
    'BoatSale',
    'FactoryProduction',
    'MarketingContent',
    'MarketingManual',
    'MarketingWarranty',
    'AdminSetting'
]
