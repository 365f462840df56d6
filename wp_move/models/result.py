"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    SKIPPED = "skipped"
    IN_PROGRESS = "in_progress"


@dataclass
class ExecutionResult:
    """Outcome of one external command"""

    return_code: int
    stdout: Optional[str] = None
    stderr: Optional[str] = None
    simulated: bool = False

    @property
    def ok(self) -> bool:
        return self.return_code == 0


@dataclass
class OperationResult:
    """Result of a push, pull, dump or test operation"""

    operation: str
    environment: str
    status: OperationStatus = OperationStatus.IN_PROGRESS
    message: str = ""
    dry_run: bool = False
    steps: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    artifacts: List[str] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_step(self, label: str) -> None:
        self.steps.append(label)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def complete(self, status: OperationStatus, message: str = "") -> 'OperationResult':
        """Mark operation as complete"""
        self.end_time = datetime.now()
        self.status = status
        if message:
            self.message = message
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "operation": self.operation,
            "environment": self.environment,
            "status": self.status.value,
            "message": self.message,
            "dry_run": self.dry_run,
            "steps": self.steps,
            "warnings": self.warnings,
            "artifacts": self.artifacts,
            "duration": self.duration,
        }
