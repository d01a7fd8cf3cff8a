"""Domain models for the size table generator.

Value objects for parsed measurements, item/size codes, per-row records and
the tables handed to the display layer.
"""

from .codes import ItemCode, SizeCode
from .error_record import ErrorRecord
from .item_record import ItemRecord
from .item_table import ItemMeta, ItemTable
from .measurement import MeasurementPair, MeasurementSet
from .run_result import RunResult

__all__ = [
    # Measurement models
    "MeasurementPair",
    "MeasurementSet",
    # Domain codes
    "ItemCode",
    "SizeCode",
    # Processing models
    "ItemRecord",
    "ItemTable",
    "ItemMeta",
    "RunResult",
    "ErrorRecord",
]
