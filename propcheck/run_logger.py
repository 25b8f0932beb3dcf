"""
Check run logger

将每次属性检查的结果写入 JSONL 文件，包括：
- 触发时间
- 耗时
- 成功/丢弃次数
- 结果状态与反例参数

日志按日期分文件存储在 logs/{property_name}/{YYYY-MM-DD}.jsonl
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import TestParameters, TestStatistics


class CheckLogger:
    """检查日志记录器"""

    def __init__(
        self,
        property_name: str,
        enabled: Optional[bool] = None,
        log_dir: str | Path | None = None,
    ):
        """
        初始化日志记录器

        Args:
            property_name: 属性名称（用于日志文件路径）
            enabled: 是否启用日志，None 表示从环境变量读取
            log_dir: 日志根目录，None 表示从环境变量读取
        """
        self.property_name = property_name

        # 从环境变量读取配置，默认关闭
        if enabled is None:
            env_value = os.getenv("PROPCHECK_LOGGING", "false").lower()
            self.enabled = env_value in ("true", "1", "yes", "on")
        else:
            self.enabled = enabled

        if log_dir is None:
            log_dir = os.getenv("PROPCHECK_LOG_DIR", "logs")
        self.log_root = Path(log_dir)
        self.property_log_dir = self.log_root / property_name

    def log_run(
        self,
        stats: TestStatistics,
        parameters: TestParameters,
        duration_ms: float,
        seed: Optional[int] = None,
        **extra_fields,
    ) -> None:
        """
        记录一次检查

        Args:
            stats: 运行统计
            parameters: 本次运行的测试参数
            duration_ms: 运行耗时（毫秒）
            seed: 随机源种子（如果已知）
            **extra_fields: 其他额外字段
        """
        if not self.enabled:
            return

        failure = stats.result.failure
        try:
            self.property_log_dir.mkdir(parents=True, exist_ok=True)
            today = datetime.now().strftime("%Y-%m-%d")
            log_file = self.property_log_dir / f"{today}.jsonl"

            log_entry = {
                "timestamp": datetime.now().isoformat(),
                "property": self.property_name,
                "status": stats.status.value,
                "succeeded": stats.succeeded,
                "discarded": stats.discarded,
                "args": list(failure.args) if failure is not None else None,
                "min_successful_tests": parameters.min_successful_tests,
                "max_discarded_tests": parameters.max_discarded_tests,
                "max_size": parameters.max_size,
                "seed": seed,
                "duration_ms": round(duration_ms, 2),
            }
            log_entry.update(extra_fields)

            with open(log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")

        except OSError as e:
            # 日志记录失败不应该影响测试结果
            print(f"Warning: Failed to write check log: {e}")


# 全局日志记录器缓存
_loggers: dict[str, CheckLogger] = {}


def get_logger(property_name: str) -> CheckLogger:
    """
    获取或创建指定属性的日志记录器

    Args:
        property_name: 属性名称

    Returns:
        CheckLogger 实例
    """
    if property_name not in _loggers:
        _loggers[property_name] = CheckLogger(property_name)
    return _loggers[property_name]
