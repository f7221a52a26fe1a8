# --coding:utf-8--
import sys
import importlib
from typing import Callable, Dict, FrozenSet, Optional

from attrs import define, field

from callgen.maker.utils import NameStyleConverterMixin, type_name
from callgen._printer import print_message


class NamingStrategy:
    """类型名/枚举成员名生成策略，输入为schema中的原始名称"""

    @staticmethod
    def pascal(name: str) -> str:
        """
        示例:
        - indices.get → IndicesGet
        - wait_for → WaitFor
        """
        return type_name(name)

    @staticmethod
    def upper_snake(name: str) -> str:
        """
        示例:
        - wait_for → WAIT_FOR
        - indices.get → INDICES_GET
        """
        return NameStyleConverterMixin.to_snake_case(name).upper()


NAMING_STRATEGIES = {
    "pascal": NamingStrategy.pascal,
    "upper_snake": NamingStrategy.upper_snake,
}

# 空字符串传给这些枚举参数时使用的成员，其余枚举参数的空值视为错误
DEFAULT_EMPTY_ENUM_VARIANTS = {
    "refresh": "true",
    "size": "unspecified",
}

# 这些枚举参数的字符串值可以是逗号分隔的多个枚举值
DEFAULT_WILDCARD_PARAMS = frozenset({"expand_wildcards"})


def load_custom_naming(naming_path: str) -> Optional[Callable]:
    """
    从指定路径加载自定义命名策略函数

    Args:
        naming_path: 格式为 "module.submodule.function_name" 的函数路径

    Returns:
        命名策略函数或None（路径不合法时）
    """
    try:
        if not naming_path or '.' not in naming_path:
            return None

        module_path, function_name = naming_path.rsplit(".", 1)
        module = importlib.import_module(module_path)
        naming_func = getattr(module, function_name)

        if not callable(naming_func):
            print_message(f"❌ 导入的对象 '{function_name}' 不是可调用的函数", style="bold red")
            sys.exit(1)

        return naming_func
    except (ImportError, AttributeError) as e:
        print_message(f"❌ 无法导入自定义命名策略 '{naming_path}': {str(e)}", style="bold red")
        sys.exit(1)


@define
class GeneratorConfig:
    naming: Callable[[str], str] = field(default=NAMING_STRATEGIES["pascal"])
    custom_naming: Optional[str] = field(default=None)  # 自定义命名策略路径
    wildcard_params: FrozenSet[str] = field(default=DEFAULT_WILDCARD_PARAMS, converter=frozenset)
    empty_enum_variants: Dict[str, str] = field(factory=lambda: dict(DEFAULT_EMPTY_ENUM_VARIANTS))
    workers: Optional[int] = field(default=None)

    def __attrs_post_init__(self):
        if self.custom_naming:
            custom_func = load_custom_naming(self.custom_naming)
            if custom_func:
                self.naming = custom_func

        if isinstance(self.naming, str):
            if self.naming not in NAMING_STRATEGIES:
                raise ValueError(f"未知的命名策略: {self.naming}，可选: {', '.join(NAMING_STRATEGIES)}")
            self.naming = NAMING_STRATEGIES[self.naming]

    @workers.validator
    def check(self, attribute, value):
        if value is not None and value < 1:
            raise ValueError("workers必须大于0")
