"""
Tests for notification emails
"""
import pytest
import smtplib
from unittest.mock import MagicMock, patch
from services.email_service import EmailService, render_order_email, render_service_request_email

SMTP_CONFIG = {
    'SMTP_HOST': 'smtp.example.com',
    'SMTP_PORT': 587,
    'SMTP_USER': 'mailer',
    'SMTP_PASSWORD': 'secret',
    'FROM_EMAIL': 'noreply@drakkarboats.com',
}

ORDER = {
    'order_id': 'ORD-20240101-AAAAAA',
    'customer_name': 'Ana <script>alert(1)</script>',
    'customer_email': 'ana@example.com',
    'boat_model': 'Drakkar 240',
    'engine_package': 'Mercury 300HP',
    'hull_color': 'Navy Blue',
    'additional_options': ['Bimini Top', 'Swim Ladder'],
    'deposit_amount': 5000,
    'total_usd': 105500,
    'total_brl': 527500,
    'status': 'pending',
}


@pytest.mark.unit
class TestRendering:
    """Tests for email bodies"""

    def test_order_subject_and_totals(self):
        """Test the order email names the order and both totals"""
        subject, html, text = render_order_email(ORDER)
        assert subject == 'New Order - ORD-20240101-AAAAAA'
        assert '105500' in html and '527500' in html
        assert 'Bimini Top, Swim Ladder' in html
        assert 'ORD-20240101-AAAAAA' in text

    def test_order_values_escaped(self):
        """Test customer-supplied values cannot inject markup"""
        _, html, _ = render_order_email(ORDER)
        assert '<script>' not in html
        assert '&lt;script&gt;' in html

    def test_service_request_issues(self):
        """Test issues are listed whether they are strings or objects"""
        subject, html, _ = render_service_request_email({
            'request_id': 'SR-1',
            'issues': ['Bilge pump', {'text': 'Trim tab stuck'}],
        })
        assert subject == 'New Service Request - SR-1'
        assert '<li>Bilge pump</li>' in html
        assert '<li>Trim tab stuck</li>' in html


@pytest.mark.unit
class TestEmailService:
    """Tests for SMTP delivery"""

    def test_disabled_without_smtp(self):
        """Test sending is skipped when SMTP is not configured"""
        service = EmailService({})
        assert service.email_enabled is False
        assert service.send_order_notification(ORDER, 'factory@drakkarboats.com') is False

    def test_no_recipient(self):
        """Test sending is skipped without a recipient"""
        assert EmailService(SMTP_CONFIG).send_order_notification(ORDER, '') is False

    @patch('services.email_service.smtplib.SMTP')
    def test_sends_over_smtp(self, mock_smtp):
        """Test a configured service logs in and sends to the recipient"""
        server = MagicMock()
        mock_smtp.return_value.__enter__.return_value = server

        sent = EmailService(SMTP_CONFIG).send_order_notification(ORDER, 'factory@drakkarboats.com')

        assert sent is True
        mock_smtp.assert_called_once_with('smtp.example.com', 587, timeout=30)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with('mailer', 'secret')
        from_addr, to_addrs, _ = server.sendmail.call_args[0]
        assert from_addr == 'noreply@drakkarboats.com'
        assert to_addrs == ['factory@drakkarboats.com']

    @patch('services.email_service.smtplib.SMTP')
    def test_smtp_failure_returns_false(self, mock_smtp):
        """Test SMTP errors are reported as not sent"""
        mock_smtp.side_effect = smtplib.SMTPConnectError(421, 'unavailable')
        assert EmailService(SMTP_CONFIG).send_order_notification(ORDER, 'factory@drakkarboats.com') is False
