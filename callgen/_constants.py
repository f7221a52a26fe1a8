# --coding:utf-8--

# log
class Log:
    LOG_NAME = "callgen.log"
    DEFAULT_LEVEL = "debug"


# config
class Conf:
    CONF_DIR = "conf"
    CONF_NAME = "callgen.yaml"
    GENERATOR_KEY = "generator"


# yaml test layout
class Step:
    DO = "do"
    CATCH = "catch"
    HEADERS = "headers"
    WARNINGS = "warnings"
    NODE_SELECTOR = "node_selector"


# reserved call arguments
class Arg:
    BODY = "body"
    IGNORE = "ignore"


# rest api spec layout
class Spec:
    COMMON_FILE = "_common.json"
    BULK_SERIALIZE = "bulk"
