from .run_logger import SWEEP_FIELDS, RunLogger

__all__ = ["RunLogger", "SWEEP_FIELDS"]
