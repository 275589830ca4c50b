"""Services: pipeline coordination and configuration"""

from .config_service import DAILY_JOB_ID, ConfigService
from .pipeline_service import PipelineOutcome, PipelineService, make_today

__all__ = ["DAILY_JOB_ID", "ConfigService", "PipelineOutcome", "PipelineService", "make_today"]
