"""wordgate: resilient outbound calls to external AI providers.

Circuit breakers, classified retry with linear backoff, and a standardized
error taxonomy shared by every provider adapter.
"""

import logging

from wordgate.config.settings import _PACKAGE_VERSION as __version__

# Library default: stay quiet unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["__version__"]
