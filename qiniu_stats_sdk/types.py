"""Type definitions for Qiniu Statistics SDK."""

from datetime import date, datetime
from typing import Any

# Generic type aliases for API responses
APIItem = dict[str, Any]
APIItemsList = list[APIItem]
APIResult = dict[str, Any]

DateLike = date | datetime | str
