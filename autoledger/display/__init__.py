"""Display-string formatting for customer records."""
from .formatters import (
    format_name, format_date, format_relative_time, format_phone_number,
    format_currency, format_customer, format_customer_with_payments,
)
