"""macrochef: recipe quantities that hit macro targets."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
