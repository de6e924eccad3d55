"""Initial database schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19

Creates all tables for the Boat Dealer Portal.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

JSON = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def _sale_columns():
    """Customer, configuration, payment and totals shared by quotes and orders."""
    return [
        sa.Column('dealer_id', sa.String(36), nullable=False),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('customer_email', sa.String(255), nullable=False),
        sa.Column('customer_phone', sa.String(50)),
        sa.Column('customer_address', sa.String(255)),
        sa.Column('customer_city', sa.String(100)),
        sa.Column('customer_state', sa.String(100)),
        sa.Column('customer_zip', sa.String(20)),
        sa.Column('customer_country', sa.String(100)),
        sa.Column('boat_model', sa.String(255)),
        sa.Column('engine_package', sa.String(255)),
        sa.Column('hull_color', sa.String(255)),
        sa.Column('upholstery_package', sa.String(255)),
        sa.Column('additional_options', JSON),
        sa.Column('payment_method', sa.String(100)),
        sa.Column('deposit_amount', sa.Float()),
        sa.Column('additional_notes', sa.Text()),
        sa.Column('total_usd', sa.Float()),
        sa.Column('total_brl', sa.Float()),
        sa.Column('status', sa.String(50), server_default='pending'),
    ] + _timestamps()


def _catalog_columns(*extra):
    return [
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('name_pt', sa.String(255)),
        sa.Column('usd', sa.Float()),
        sa.Column('brl', sa.Float()),
        sa.Column('display_order', sa.Integer(), server_default='0'),
        *extra,
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    ]


def upgrade() -> None:
    # Dealers
    op.create_table('dealers',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50)),
        sa.Column('address', sa.String(255)),
        sa.Column('city', sa.String(100)),
        sa.Column('state', sa.String(100)),
        sa.Column('zip_code', sa.String(20)),
        sa.Column('country', sa.String(100), server_default='All'),
        sa.Column('display_order', sa.Integer(), server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index('ix_dealers_email', 'dealers', ['email'])

    # Quotes & orders
    op.create_table('quotes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('quote_id', sa.String(50), nullable=False),
        *_sale_columns(),
        sa.Column('valid_until', sa.Date()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('quote_id')
    )
    op.create_index('ix_quotes_dealer_id', 'quotes', ['dealer_id'])

    op.create_table('orders',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('order_id', sa.String(50), nullable=False),
        *_sale_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('order_id')
    )
    op.create_index('ix_orders_dealer_id', 'orders', ['dealer_id'])

    # Service requests
    op.create_table('service_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('request_id', sa.String(50), nullable=False),
        sa.Column('dealer_id', sa.String(36), nullable=False),
        sa.Column('customer_name', sa.String(255)),
        sa.Column('customer_email', sa.String(255)),
        sa.Column('customer_phone', sa.String(50)),
        sa.Column('customer_address', sa.String(255)),
        sa.Column('boat_model', sa.String(255)),
        sa.Column('hull_id', sa.String(100)),
        sa.Column('purchase_date', sa.Date()),
        sa.Column('engine_hours', sa.String(50)),
        sa.Column('request_type', sa.String(100)),
        sa.Column('issues', JSON),
        sa.Column('status', sa.String(50), server_default='open'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('request_id')
    )
    op.create_index('ix_service_requests_dealer_id', 'service_requests', ['dealer_id'])

    op.create_table('service_messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('service_request_id', sa.String(50), nullable=False),
        sa.Column('sender_type', sa.String(20), nullable=False),
        sa.Column('sender_name', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_service_messages_service_request_id', 'service_messages', ['service_request_id'])

    # Catalog
    op.create_table('boat_models', *_catalog_columns())
    op.create_table('engine_packages', *_catalog_columns(
        sa.Column('compatible_models', JSON),
        sa.Column('countries', JSON),
    ))
    op.create_table('hull_colors', *_catalog_columns(sa.Column('compatible_models', JSON)))
    op.create_table('upholstery_packages', *_catalog_columns(sa.Column('compatible_models', JSON)))
    op.create_table('additional_options', *_catalog_columns(
        sa.Column('category', sa.String(100)),
        sa.Column('compatible_models', JSON),
        sa.Column('countries', JSON),
    ))

    # Dealer tools
    op.create_table('dealer_pricing',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('dealer_id', sa.String(36), nullable=False),
        sa.Column('item_type', sa.String(50), nullable=False),
        sa.Column('item_id', sa.String(50), nullable=False),
        sa.Column('item_name', sa.String(255), nullable=False),
        sa.Column('sale_price_usd', sa.Float()),
        sa.Column('sale_price_brl', sa.Float()),
        sa.Column('margin_percentage', sa.Float()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('dealer_id', 'item_type', 'item_id', name='uq_dealer_pricing_item')
    )
    op.create_index('ix_dealer_pricing_dealer', 'dealer_pricing', ['dealer_id'])

    op.create_table('dealer_inventory',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('dealer_id', sa.String(36)),
        sa.Column('dealer_name', sa.String(255), nullable=False),
        sa.Column('boat_model', sa.String(255), nullable=False),
        sa.Column('boat_color', sa.String(255), nullable=False),
        sa.Column('engine_package', sa.String(255), nullable=False),
        sa.Column('cost_price', sa.Float()),
        sa.Column('sale_price', sa.Float()),
        sa.Column('status', sa.String(50), server_default='available'),
        sa.Column('date_added', sa.Date()),
        sa.Column('notes', sa.Text()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('boat_sales',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('dealer_name', sa.String(255), nullable=False),
        sa.Column('boat_model', sa.String(255), nullable=False),
        sa.Column('sale_price_usd', sa.Float()),
        sa.Column('sale_price_eur', sa.Float()),
        sa.Column('sale_price_brl', sa.Float()),
        sa.Column('sale_price_gbp', sa.Float()),
        sa.Column('currency', sa.String(10), server_default='USD'),
        sa.Column('margin_percentage', sa.Float()),
        sa.Column('notes', sa.Text()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('dealer_name', 'boat_model', name='uq_boat_sales_dealer_model')
    )

    # Factory & marketing
    op.create_table('factory_production',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('boat_model', sa.String(255)),
        sa.Column('engine_package', sa.String(255)),
        sa.Column('hull_color', sa.String(255)),
        sa.Column('upholstery_package', sa.String(255)),
        sa.Column('additional_options', JSON),
        sa.Column('total_value_usd', sa.Float()),
        sa.Column('total_value_brl', sa.Float()),
        sa.Column('status', sa.String(50), server_default='planning'),
        sa.Column('expected_completion_date', sa.Date()),
        sa.Column('notes', sa.Text()),
        sa.Column('display_order', sa.Integer(), server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('marketing_content',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title_en', sa.String(255)),
        sa.Column('title_pt', sa.String(255)),
        sa.Column('subtitle_en', sa.String(255)),
        sa.Column('subtitle_pt', sa.String(255)),
        sa.Column('image_url', sa.Text(), nullable=False),
        sa.Column('boat_model', sa.String(255), server_default='All Models'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    for table in ('marketing_manuals', 'marketing_warranties'):
        op.create_table(table,
            sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('name_en', sa.String(255), nullable=False),
            sa.Column('name_pt', sa.String(255), nullable=False),
            sa.Column('url', sa.Text(), nullable=False),
            sa.Column('image_url', sa.Text()),
            sa.Column('display_order', sa.Integer(), server_default='0'),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )

    # Admin settings
    op.create_table('admin_settings',
        sa.Column('setting_key', sa.String(100), nullable=False),
        sa.Column('setting_value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('setting_key')
    )


def downgrade() -> None:
    # Drop tables in reverse order of creation
    op.drop_table('admin_settings')
    op.drop_table('marketing_warranties')
    op.drop_table('marketing_manuals')
    op.drop_table('marketing_content')
    op.drop_table('factory_production')
    op.drop_table('boat_sales')
    op.drop_table('dealer_inventory')
    op.drop_table('dealer_pricing')
    op.drop_table('additional_options')
    op.drop_table('upholstery_packages')
    op.drop_table('hull_colors')
    op.drop_table('engine_packages')
    op.drop_table('boat_models')
    op.drop_table('service_messages')
    op.drop_table('service_requests')
    op.drop_table('orders')
    op.drop_table('quotes')
    op.drop_table('dealers')
