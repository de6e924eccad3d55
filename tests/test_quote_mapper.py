"""
Tests for quote / order field mapping
"""
import pytest
from datetime import date
from services.identifiers import generate_order_id, generate_quote_id, generate_service_request_id
from services.quote_mapper import (
    SALE_FIELDS,
    order_payload_to_record,
    order_to_wire,
    quote_payload_to_record,
    quote_to_order_record,
    quote_to_wire,
    service_request_payload_to_record,
    validate_quote_payload,
)
from validators import ValidationError

DEALER_ID = '3f2b8c1e-9a4d-4e6f-8b2a-1c3d5e7f9a0b'


def _quote_payload(**overrides):
    payload = {
        'customer': {'name': 'Ana Souza', 'email': 'ana@example.com', 'phone': '555-0100'},
        'model': 'Drakkar 240',
        'engine': 'Mercury 300HP',
        'hull_color': 'Navy Blue',
        'dealerId': DEALER_ID,
    }
    payload.update(overrides)
    return payload


@pytest.mark.unit
class TestIdentifiers:
    """Tests for human-readable identifiers"""

    def test_prefixes(self):
        """Test each record kind gets its prefix"""
        assert generate_quote_id().startswith('QUO-')
        assert generate_order_id().startswith('ORD-')
        assert generate_service_request_id().startswith('SR-')

    def test_format(self):
        """Test PREFIX-YYYYMMDD-XXXXXX layout"""
        prefix, day, suffix = generate_quote_id().split('-')
        assert len(day) == 8 and day.isdigit()
        assert len(suffix) == 6

    def test_unique(self):
        """Test consecutive ids differ"""
        assert len({generate_order_id() for _ in range(50)}) == 50


@pytest.mark.unit
class TestValidateQuotePayload:
    """Tests for quote payload validation"""

    def test_complete_payload(self):
        """Test a complete payload passes"""
        validate_quote_payload(_quote_payload())

    def test_missing_customer_email(self):
        """Test missing customer email is named in the error"""
        payload = _quote_payload(customer={'name': 'Ana Souza', 'phone': '555-0100'})
        with pytest.raises(ValidationError) as exc_info:
            validate_quote_payload(payload)
        assert exc_info.value.field == 'customerEmail'
        assert 'customerEmail' in exc_info.value.message

    def test_missing_customer_object(self):
        """Test a payload with no customer reports the name first"""
        payload = _quote_payload()
        del payload['customer']
        with pytest.raises(ValidationError) as exc_info:
            validate_quote_payload(payload)
        assert exc_info.value.field == 'customerName'

    def test_blank_model(self):
        """Test blank required fields count as missing"""
        with pytest.raises(ValidationError) as exc_info:
            validate_quote_payload(_quote_payload(model='  '))
        assert exc_info.value.field == 'boatModel'

    def test_malformed_dealer_id(self):
        """Test dealerId must be a canonical UUID"""
        with pytest.raises(ValidationError) as exc_info:
            validate_quote_payload(_quote_payload(dealerId='dealer-42'))
        assert exc_info.value.field == 'dealerId'

    def test_not_an_object(self):
        """Test lists are rejected"""
        with pytest.raises(ValidationError):
            validate_quote_payload([])


@pytest.mark.unit
class TestQuoteRecord:
    """Tests for the payload -> column mapping"""

    def test_defaults_for_optional_fields(self):
        """Test optional fields default instead of being undefined"""
        record = quote_payload_to_record(_quote_payload(), 'QUO-20240101-ABCDEF')

        assert record['quote_id'] == 'QUO-20240101-ABCDEF'
        assert record['dealer_id'] == DEALER_ID
        assert record['customer_address'] == ''
        assert record['upholstery_package'] == ''
        assert record['additional_options'] == []
        assert record['deposit_amount'] == 0.0
        assert record['total_usd'] == 0.0
        assert record['status'] == 'pending'
        assert record['valid_until'] is None

    def test_totals_and_options(self):
        """Test numeric and list fields are carried over"""
        record = quote_payload_to_record(
            _quote_payload(totalUsd='1500.50', totalBrl=7500, options=['Bimini Top'], validUntil='2024-06-30'),
            'QUO-1'
        )
        assert record['total_usd'] == 1500.5
        assert record['total_brl'] == 7500.0
        assert record['additional_options'] == ['Bimini Top']
        assert record['valid_until'] == date(2024, 6, 30)

    def test_quote_to_order_copies_sale_fields(self):
        """Test accepting copies every sale field with a fresh id and status"""
        quote = quote_payload_to_record(_quote_payload(options=['Swim Ladder']), 'QUO-1')
        quote['status'] = 'accepted'

        order = quote_to_order_record(quote, 'ORD-1')

        assert order['order_id'] == 'ORD-1'
        assert order['status'] == 'pending'
        for field in SALE_FIELDS:
            assert order[field] == quote[field]
        assert 'quote_id' not in order


@pytest.mark.unit
class TestWireShapes:
    """Tests for list-screen shapes"""

    def test_quote_to_wire(self):
        """Test a stored quote is nested back into the dealer shape"""
        stored = quote_payload_to_record(_quote_payload(totalUsd=100), 'QUO-1')
        stored['created_at'] = '2024-03-15T10:30:00'

        wire = quote_to_wire(stored, 'Harbor Boats')

        assert wire['quoteId'] == 'QUO-1'
        assert wire['dealer'] == 'Harbor Boats'
        assert wire['customer']['email'] == 'ana@example.com'
        assert wire['model'] == 'Drakkar 240'
        assert wire['totalUsd'] == 100
        assert wire['date'] == '15/03/2024'
        assert wire['status'] == 'pending'

    def test_order_to_wire_without_date(self):
        """Test a missing timestamp renders as an empty date"""
        wire = order_to_wire({'order_id': 'ORD-1', 'customer_name': 'Ana'}, 'Harbor Boats')
        assert wire['orderId'] == 'ORD-1'
        assert wire['date'] == ''
        assert wire['options'] == []


@pytest.mark.unit
class TestOrderRecord:
    """Tests for direct order payloads"""

    def test_missing_fields_named(self):
        """Test every missing required field is listed"""
        with pytest.raises(ValidationError) as exc_info:
            order_payload_to_record({'order_id': 'ORD-1'})
        assert 'dealer_id' in exc_info.value.message
        assert 'customer_email' in exc_info.value.message

    def test_numbers_coerced(self):
        """Test totals arrive as floats and status defaults to pending"""
        record = order_payload_to_record({
            'order_id': 'ORD-1',
            'dealer_id': DEALER_ID,
            'customer_name': 'Ana',
            'customer_email': 'ana@example.com',
            'total_usd': '99000',
        })
        assert record['total_usd'] == 99000.0
        assert record['deposit_amount'] == 0.0
        assert record['status'] == 'pending'


@pytest.mark.unit
class TestServiceRequestRecord:
    """Tests for service request payloads"""

    def test_status_lowercased(self):
        """Test status is stored lowercase with 'open' as default"""
        record = service_request_payload_to_record({'status': 'In Progress'}, DEALER_ID, 'SR-1')
        assert record['status'] == 'in progress'
        assert service_request_payload_to_record({}, DEALER_ID, 'SR-2')['status'] == 'open'

    def test_blank_purchase_date(self):
        """Test blank purchase dates become None"""
        record = service_request_payload_to_record({'purchase_date': ''}, DEALER_ID, 'SR-1')
        assert record['purchase_date'] is None
