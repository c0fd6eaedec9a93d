"""Domain value objects and type aliases."""

from enum import Enum
from typing import NewType

# Type aliases for domain clarity
ReportId = NewType("ReportId", str)
ProfileId = NewType("ProfileId", str)


class ProgressStatus(str, Enum):
    """Status of a long-running analysis reported to clients."""

    CONNECTING = "connecting"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"
