# --coding:utf-8--
import sys
from typing import Optional

from loguru import logger as uru_logger

from callgen._constants import Log

STDOUT_FORMAT = ("<green>{time:YYYY-MM-DD HH:mm:ss}</green> "  # 时间
                 "<cyan>[{module}</cyan>.<cyan>{function}</cyan>"  # 模块名.方法名
                 ":<cyan>{line}]</cyan>-"  # 行号
                 "<level>[{level}]</level>: "  # 等级
                 "<level>{message}</level>")  # 日志内容
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} [{module}.{function}:{line}]-[{level}]:{message}"


class CallGenLogger:
    logger = uru_logger
    stdout_handler_id: Optional[int] = None
    file_handler_id: Optional[int] = None

    # log level: TRACE < DEBUG < INFO < SUCCESS < WARNING < ERROR < CRITICAL
    def __init__(self, level: str = "info", log_file_path: Optional[str] = None):
        self.stdout_handler(level=level)
        if log_file_path:
            self.file_handler(level=Log.DEFAULT_LEVEL, log_file_path=log_file_path)

    @classmethod
    def stdout_handler(cls, level):
        """配置控制台输出日志"""
        if cls.stdout_handler_id is not None:
            return
        # 清空所有设置
        cls.logger.remove()
        cls.stdout_handler_id = cls.logger.add(sys.stdout, level=level.upper(), format=STDOUT_FORMAT)

    @classmethod
    def file_handler(cls, level, log_file_path):
        """配置日志文件，只添加一个file_handler"""
        if cls.file_handler_id is not None:
            return
        cls.file_handler_id = cls.logger.add(log_file_path,
                                             level=level.upper(),
                                             format=FILE_FORMAT,
                                             rotation="10 MB",
                                             encoding="utf-8")

    @classmethod
    def change_level(cls, level):
        """更改stdout_handler级别"""
        if cls.stdout_handler_id is not None:
            cls.logger.remove(cls.stdout_handler_id)
        cls.stdout_handler_id = cls.logger.add(sys.stdout, level=level.upper(), format=STDOUT_FORMAT)


callgen_logger = CallGenLogger()
logger = callgen_logger.logger
