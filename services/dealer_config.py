"""
Dealer configuration: the catalog as one dealer sees it.

Engine packages and additional options are limited to the dealer's country,
and every item is decorated with the dealer's own sale price when one is set.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from services.catalog_repository import CatalogRepository
from services.dealer_tools_repository import DealerToolsRepository
from services.dealers_repository import DealersRepository

logger = logging.getLogger(__name__)

WILDCARD_COUNTRY = 'All'

# Catalog table -> (dealer_pricing.item_type, response key, filtered by country)
CATALOG_SECTIONS = (
    ('boat_models', 'boat_model', 'boatModels', False),
    ('engine_packages', 'engine_package', 'enginePackages', True),
    ('hull_colors', 'hull_color', 'hullColors', False),
    ('upholstery_packages', 'upholstery_package', 'upholsteryPackages', False),
    ('additional_options', 'additional_option', 'additionalOptions', True),
)


def available_in_country(item: Dict, country: str) -> bool:
    """Items without a country list, or listing 'All', are sold everywhere."""
    countries = item.get('countries') or []
    if not countries or WILDCARD_COUNTRY in countries:
        return True
    return country in countries


def apply_dealer_pricing(items: List[Dict], item_type: str, pricing: List[Dict]) -> List[Dict]:
    """Attach dealer sale prices; catalog prices stay as cost_usd / cost_brl."""
    by_item = {
        str(p['item_id']): p for p in pricing if p['item_type'] == item_type
    }

    decorated = []
    for item in items:
        entry = dict(item)
        entry['cost_usd'] = item.get('usd') or 0
        entry['cost_brl'] = item.get('brl') or 0

        price = by_item.get(str(item.get('id')))
        if price:
            entry.update({
                'price_usd': price['sale_price_usd'] or entry['cost_usd'],
                'price_brl': price['sale_price_brl'] or entry['cost_brl'],
                'sale_price_usd': price['sale_price_usd'],
                'sale_price_brl': price['sale_price_brl'],
                'margin_percentage': price['margin_percentage'] or 0,
                'dealer_configured': True,
            })
        else:
            entry['dealer_configured'] = False
        decorated.append(entry)
    return decorated


def build_dealer_config(session: Session, dealer_id: Optional[str] = None) -> Dict:
    """
    Catalog for one dealer. Without a dealer id (or for an unknown dealer)
    the global catalog is returned with no dealer pricing.
    """
    country = WILDCARD_COUNTRY
    pricing = []

    if dealer_id:
        dealer = DealersRepository(session).get_dealer(dealer_id)
        if dealer is None:
            logger.warning(f"Dealer {dealer_id} not found, returning global configuration")
        else:
            country = dealer.country or WILDCARD_COUNTRY
            pricing = DealerToolsRepository(session).list_pricing(dealer_id)

    catalog = CatalogRepository(session)
    config = {}
    for table, item_type, key, by_country in CATALOG_SECTIONS:
        items = catalog.list_items(table)
        if by_country:
            items = [item for item in items if available_in_country(item, country)]
        config[key] = apply_dealer_pricing(items, item_type, pricing)

    config['dealerCountry'] = country
    config['dealerPricingCount'] = len(pricing)
    return config
