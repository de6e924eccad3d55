"""
Email Service - order and service request notifications for the factory.

Messages go to the address stored in admin_settings (notification_email)
over SMTP, configured from SMTP_HOST / SMTP_PORT / SMTP_USER /
SMTP_PASSWORD / FROM_EMAIL. With SMTP unconfigured the send is skipped and
logged, so a missing mail server never breaks order entry.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict, Mapping, Tuple

from markupsafe import escape

logger = logging.getLogger(__name__)

EMAIL_STYLE = """
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: #1e3a8a; color: white; padding: 20px; text-align: center; }
        .content { background: #f8f9fa; padding: 20px; }
        .section { margin-bottom: 20px; }
        .label { font-weight: bold; color: #1e3a8a; }
        .total { background: #e3f2fd; padding: 15px; border-left: 4px solid #1e3a8a; }
"""


def _row(label: str, value: Any) -> str:
    return f'<p><span class="label">{escape(label)}:</span> {escape(value if value is not None else "")}</p>'


def _page(title: str, header: str, sections: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{escape(title)}</title>
    <style>{EMAIL_STYLE}</style>
</head>
<body>
    <div class="container">
        <div class="header">{header}</div>
        <div class="content">{sections}</div>
    </div>
</body>
</html>"""


def render_order_email(order: Dict) -> Tuple[str, str, str]:
    """Returns (subject, html, text) for a new order."""
    order_id = order.get('order_id', '')
    subject = f"New Order - {order_id}"

    options = order.get('additional_options') or []
    customer = [
        _row('Name', order.get('customer_name')),
        _row('Email', order.get('customer_email')),
        _row('Phone', order.get('customer_phone')),
    ]
    if order.get('customer_address'):
        customer.append(_row('Address', order.get('customer_address')))

    boat = [
        _row('Model', order.get('boat_model')),
        _row('Engine', order.get('engine_package')),
        _row('Hull color', order.get('hull_color')),
    ]
    if order.get('upholstery_package'):
        boat.append(_row('Upholstery', order.get('upholstery_package')))
    if options:
        boat.append(_row('Options', ', '.join(str(o) for o in options)))

    payment = [_row('Method', order.get('payment_method'))]
    if (order.get('deposit_amount') or 0) > 0:
        payment.append(_row('Deposit', f"${order['deposit_amount']}"))

    sections = (
        '<div class="section"><h3>Customer</h3>' + ''.join(customer) + '</div>'
        '<div class="section"><h3>Boat configuration</h3>' + ''.join(boat) + '</div>'
        '<div class="section"><h3>Payment</h3>' + ''.join(payment) + '</div>'
        f'<div class="total"><h3>Total: ${escape(order.get("total_usd", 0))} USD / '
        f'R${escape(order.get("total_brl", 0))} BRL</h3></div>'
        '<div class="section">' + _row('Status', order.get('status')) + '</div>'
    )
    html = _page(subject, f'<h1>New Boat Order</h1><p>ID: {escape(order_id)}</p>', sections)

    text = (
        f"New order {order_id}\n"
        f"Customer: {order.get('customer_name', '')} <{order.get('customer_email', '')}>\n"
        f"Boat: {order.get('boat_model', '')} / {order.get('engine_package', '')} / {order.get('hull_color', '')}\n"
        f"Total: ${order.get('total_usd', 0)} USD / R${order.get('total_brl', 0)} BRL\n"
    )
    return subject, html, text


def render_service_request_email(request: Dict) -> Tuple[str, str, str]:
    """Returns (subject, html, text) for a new service request."""
    request_id = request.get('request_id', '')
    subject = f"New Service Request - {request_id}"

    issues = request.get('issues') or []
    issue_items = ''.join(f'<li>{escape(_describe_issue(i))}</li>' for i in issues)

    sections = (
        '<div class="section"><h3>Customer</h3>'
        + _row('Name', request.get('customer_name'))
        + _row('Email', request.get('customer_email'))
        + _row('Phone', request.get('customer_phone'))
        + '</div>'
        '<div class="section"><h3>Boat</h3>'
        + _row('Model', request.get('boat_model'))
        + _row('Hull ID', request.get('hull_id'))
        + _row('Purchase date', request.get('purchase_date'))
        + _row('Engine hours', request.get('engine_hours'))
        + '</div>'
        '<div class="section"><h3>Request</h3>'
        + _row('Type', request.get('request_type'))
        + _row('Status', request.get('status'))
        + (f'<ul>{issue_items}</ul>' if issue_items else '')
        + '</div>'
    )
    html = _page(subject, f'<h1>New Service Request</h1><p>ID: {escape(request_id)}</p>', sections)

    text = (
        f"New service request {request_id}\n"
        f"Customer: {request.get('customer_name', '')} <{request.get('customer_email', '')}>\n"
        f"Boat: {request.get('boat_model', '')} (hull {request.get('hull_id', '')})\n"
        f"Issues: {len(issues)}\n"
    )
    return subject, html, text


def _describe_issue(issue: Any) -> str:
    if isinstance(issue, dict):
        return issue.get('text') or issue.get('description') or ', '.join(f"{k}: {v}" for k, v in issue.items())
    return str(issue)


class EmailService:
    """SMTP sender for portal notifications."""

    def __init__(self, config: Mapping[str, Any]):
        self.smtp_host = config.get('SMTP_HOST', '')
        self.smtp_port = int(config.get('SMTP_PORT', 587))
        self.smtp_user = config.get('SMTP_USER', '')
        self.smtp_password = config.get('SMTP_PASSWORD', '')
        self.from_email = config.get('FROM_EMAIL', 'noreply@drakkarboats.com')
        self.email_enabled = bool(self.smtp_host and self.smtp_user)

    def send_email(self, to: str, subject: str, html: str, text: str = '') -> bool:
        """Send one HTML email. Returns False when skipped or on failure."""
        if not to:
            logger.warning(f"No recipient for '{subject}', email skipped")
            return False
        if not self.email_enabled:
            logger.info(f"SMTP not configured, email '{subject}' to {to} skipped")
            return False

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = self.from_email
        msg['To'] = to
        if text:
            msg.attach(MIMEText(text, 'plain'))
        msg.attach(MIMEText(html, 'html'))

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                server.starttls()
                server.login(self.smtp_user, self.smtp_password)
                server.sendmail(self.from_email, [to], msg.as_string())
            logger.info(f"Sent email '{subject}' to {to}")
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email '{subject}' to {to}: {e}")
            return False

    def send_order_notification(self, order: Dict, recipient: str) -> bool:
        subject, html, text = render_order_email(order)
        return self.send_email(recipient, subject, html, text)

    def send_service_request_notification(self, request: Dict, recipient: str) -> bool:
        subject, html, text = render_service_request_email(request)
        return self.send_email(recipient, subject, html, text)
