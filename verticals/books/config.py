"""Books vertical configuration.

Re-exports the BooksConfig from the patterns module, built from the
environment at import time.
"""

from patterns.domain_config import BooksConfig

# Process-wide configuration instance
config = BooksConfig.from_env()
