__version__ = "0.1.0"

from .catalog import Catalog
from .core.record import BaseRecord
from .fields import computed
from .utils import get_version

__all__ = [
    "BaseRecord",
    "Catalog",
    "computed",
    "get_version",
]
