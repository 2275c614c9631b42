"""Receipt parsing components - one parser per extracted field."""

from .merchant_parser import MerchantParser
from .address_parser import AddressParser
from .date_parser import DateParser
from .amount_parser import TotalAmountParser
from .tax_parser import TaxParser
from .line_item_parser import LineItemParser

__all__ = ['MerchantParser', 'AddressParser', 'DateParser', 'TotalAmountParser', 'TaxParser', 'LineItemParser']
