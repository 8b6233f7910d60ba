from .monitor import HealthResponse, MonitorRunResponse

__all__ = [
    "HealthResponse",
    "MonitorRunResponse",
]
