"""
API Blueprints Package

All HTTP route handlers for the portal, organized by domain.
Each module defines a Flask Blueprint registered in portal/__init__.py.

BLUEPRINT REFERENCE:
====================

Dealer side:
- dealer.py       : Login, profile, password, dealer catalog config
- quotes.py       : Quote creation, listing, quote -> order conversion
- orders.py       : Direct orders, dealer order list
- service.py      : Service requests and their message threads
- dealer_tools.py : Dealer pricing, stock inventory, MSRP sheet

Admin side:
- admin.py        : Admin password, bulk catalog data, display order, notifications
- content.py      : Factory production and marketing material

Shared:
- uploads.py      : Image upload to the CDN
"""

# All blueprints are imported and registered in portal/__init__.py
# This file serves as documentation only

__all__ = []
