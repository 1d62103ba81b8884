"""
Shared Pattern Definitions.

Regular expressions used by more than one parsing stage. Patterns
that belong to a single stage live next to that stage.

Author: ML Engineering Team
"""

import re

# "Invoice No. : MUM2526/61782" (label, separator, alphanumeric/slash token)
INVOICE_NO_LABEL = re.compile(
    r'Invoice\s*No\.?\s*[:\-]\s*([A-Z0-9/]+)',
    re.IGNORECASE
)

# Day/month/year numeric triple, e.g. "11/10/2025" or "3-4-2025"
DATE_TRIPLE = r'(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})'

# Currency prefixes tolerated before an amount
CURRENCY_PREFIX = r'(?:₹|Rs\.?|INR|\$)'

# Amount with optional currency prefix, thousands commas and two decimals
AMOUNT = rf'{CURRENCY_PREFIX}?\s*\d[\d,]*\.\d{{2}}'
