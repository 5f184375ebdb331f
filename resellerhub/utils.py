import re
from datetime import datetime, date

_NON_DIGIT = re.compile(r'\D')

def parse_cost(value, default=0):
    """Turn a stored cost into a number.

    Numbers pass through. Strings such as 'Rp 20.000' lose every non-digit
    character before parsing, so '20.000' reads as 20000.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    digits = _NON_DIGIT.sub('', str(value))
    if not digits:
        return default
    return int(digits)

def clean_string(s, default=''):
    if s is None:
        return default
    return str(s).strip()

def format_address_line(address):
    if not address:
        return ''
    parts = [
        clean_string(address.get('address')),
        clean_string(address.get('city')),
        clean_string(address.get('province')),
        clean_string(address.get('postal_code')),
    ]
    return ', '.join(p for p in parts if p)

def parse_timestamp(value):
    """Best-effort conversion of a stored date/time into a datetime.

    Free-text estimates like '2-3 days' return None.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace('Z', '+00:00'))
    except ValueError:
        return None
    # Stored timestamps are naive local time
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
