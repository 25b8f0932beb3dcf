"""
Run logger for recording and querying completed test runs.
"""

from datetime import datetime
from typing import Optional

from .models import OutcomeStatus, RunLog


class RunLogger:
    """
    运行日志记录器，记录每次属性检查的结果。

    支持功能：
    - 记录测试运行结果
    - 按属性名查询运行记录
    - 按结果状态查询运行记录
    """

    def __init__(self) -> None:
        """初始化日志记录器，使用内存存储"""
        self._logs: list[RunLog] = []

    def log(
        self,
        property_name: str,
        status: OutcomeStatus,
        succeeded: int,
        discarded: int,
        duration_ms: float,
        args: tuple[str, ...] = (),
        timestamp: Optional[datetime] = None,
    ) -> RunLog:
        """
        记录一次测试运行。

        Args:
            property_name: 属性名称
            status: 运行结果状态
            succeeded: 成功的测试次数
            discarded: 丢弃的测试次数
            duration_ms: 运行耗时（毫秒）
            args: 反例参数（仅失败时）
            timestamp: 时间戳，默认为当前时间

        Returns:
            创建的RunLog记录
        """
        if timestamp is None:
            timestamp = datetime.now()

        log_entry = RunLog(
            property_name=property_name,
            status=status,
            succeeded=succeeded,
            discarded=discarded,
            duration_ms=duration_ms,
            args=tuple(args),
            timestamp=timestamp,
        )
        self._logs.append(log_entry)
        return log_entry

    def get_logs_by_property(self, property_name: str) -> list[RunLog]:
        """按属性名查询运行记录"""
        return [log for log in self._logs if log.property_name == property_name]

    def get_logs_by_status(self, status: OutcomeStatus) -> list[RunLog]:
        """按结果状态查询运行记录"""
        return [log for log in self._logs if log.status is status]

    def get_failures(self) -> list[RunLog]:
        """获取所有失败的运行记录"""
        return self.get_logs_by_status(OutcomeStatus.FAILED)

    def get_all_logs(self) -> list[RunLog]:
        """
        获取所有运行日志。

        Returns:
            所有运行日志列表的副本
        """
        return list(self._logs)

    def clear(self) -> None:
        """清空所有日志记录"""
        self._logs.clear()
