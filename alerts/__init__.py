from .dataset import DatasetError, load_records, normalize_records, parse_records
from .models import Alert, AlertRecord

__all__ = [
    "Alert",
    "AlertRecord",
    "DatasetError",
    "load_records",
    "normalize_records",
    "parse_records",
]
