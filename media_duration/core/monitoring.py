"""
Health check utilities for the duration worker
"""

import psutil
import shutil
import time
from datetime import datetime
from typing import Dict, Any, Optional
from pydantic import BaseModel, ConfigDict


class SystemHealth(BaseModel):
    """System health status model"""

    status: str
    timestamp: datetime
    uptime: float
    memory_usage: Dict[str, Any]
    disk_usage: Dict[str, Any]
    cpu_usage: float
    active_processes: int
    ffprobe: Dict[str, Any]

    model_config = ConfigDict()


class HealthChecker:
    """Health checking with system metrics and ffprobe availability"""

    def __init__(self, ffprobe_binary_path: str = "ffprobe"):
        self.start_time = time.time()
        self.ffprobe_binary_path = ffprobe_binary_path

    def get_memory_info(self) -> Dict[str, Any]:
        """Get memory usage information"""
        memory = psutil.virtual_memory()
        return {
            "total": memory.total,
            "available": memory.available,
            "used": memory.used,
            "percentage": memory.percent,
        }

    def get_disk_info(self, path: str = "/") -> Dict[str, Any]:
        disk = psutil.disk_usage(path)
        return {
            "total": disk.total,
            "used": disk.used,
            "free": disk.free,
            "percentage": disk.percent,
        }

    def get_cpu_info(self) -> float:
        # Non-blocking: compares against the previous call
        return psutil.cpu_percent(interval=None)

    def get_process_count(self) -> int:
        return len(psutil.pids())

    def get_ffprobe_info(self) -> Dict[str, Any]:
        """Report whether the configured ffprobe binary resolves"""
        resolved: Optional[str] = shutil.which(self.ffprobe_binary_path)
        return {
            "configured": self.ffprobe_binary_path,
            "path": resolved,
            "available": resolved is not None,
        }

    def get_system_health(self) -> SystemHealth:
        """Get comprehensive system health status"""
        uptime = time.time() - self.start_time
        memory = self.get_memory_info()
        disk = self.get_disk_info()
        cpu = self.get_cpu_info()
        processes = self.get_process_count()
        ffprobe = self.get_ffprobe_info()

        # Determine overall status
        status = "healthy"
        if (
            not ffprobe["available"]
            or memory["percentage"] > 90
            or disk["percentage"] > 95
            or cpu > 95
        ):
            status = "unhealthy"
        elif memory["percentage"] > 80 or disk["percentage"] > 85 or cpu > 80:
            status = "warning"

        return SystemHealth(
            status=status,
            timestamp=datetime.now(),
            uptime=uptime,
            memory_usage=memory,
            disk_usage=disk,
            cpu_usage=cpu,
            active_processes=processes,
            ffprobe=ffprobe,
        )
