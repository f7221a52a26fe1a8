# --coding:utf-8--
import os

from callgen._constants import Log, Conf

# 项目根目录
BASEDIR = os.getcwd()
# 配置文件的路径
CONF_DIR = os.path.join(BASEDIR, Conf.CONF_DIR)
# 日志文件目录
LOG_DIR = os.path.join(BASEDIR, "logs")
LOG_FILE_PATH = os.path.join(LOG_DIR, Log.LOG_NAME)

CALLGEN_YAML_PATH = os.path.join(CONF_DIR, Conf.CONF_NAME)
