"""Business settings shared by the services.

Values can be overridden through environment variables (or a .env file).
"""

import os

from . import environment  # noqa: F401  (loads .env first)

# Pagination
DEFAULT_PAGE_SIZE = int(os.getenv('DEFAULT_PAGE_SIZE', '20'))
MAX_PAGE_SIZE = int(os.getenv('MAX_PAGE_SIZE', '100'))

# Event validation
TITLE_MAX_LENGTH = int(os.getenv('TITLE_MAX_LENGTH', '200'))
