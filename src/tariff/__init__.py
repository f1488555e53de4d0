"""Street-net tariff calculation."""

from .fare import TariffQuote, format_street_net, quote_fare, street_net

__all__ = ['TariffQuote', 'format_street_net', 'quote_fare', 'street_net']
