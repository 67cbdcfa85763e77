import time
from typing import Optional, Dict, Any
from contextlib import contextmanager

from utils.logger import setup_logger

logger = setup_logger(__name__)


class StageTimer:
    def __init__(self, operation_name: str, dish: Optional[str] = None):
        self.operation_name = operation_name
        self.dish = dish
        self.stages: Dict[str, float] = {}

    @contextmanager
    def stage(self, stage_name: str):
        start_time = time.perf_counter()
        try:
            yield
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.stages[stage_name] = round(duration_ms, 2)

            logger.debug(
                f"Stage completed: {stage_name}",
                extra={
                    "operation": self.operation_name,
                    "stage": stage_name,
                    "duration_ms": self.stages[stage_name],
                    "dish": self.dish
                }
            )

    def get_summary(self) -> Dict[str, Any]:
        return {
            "stages": dict(self.stages),
            "total_duration_ms": round(sum(self.stages.values()), 2),
            "stage_count": len(self.stages)
        }

    def log_summary(self):
        summary = self.get_summary()

        logger.info(
            f"{self.operation_name} timing summary",
            extra={
                "operation": self.operation_name,
                "dish": self.dish,
                "total_duration_ms": summary["total_duration_ms"],
                "stages": summary["stages"]
            }
        )
