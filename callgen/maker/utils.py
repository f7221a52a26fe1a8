# --coding:utf-8--
import re
import keyword

from inflection import camelize, underscore


class NameStyleConverterMixin:
    @staticmethod
    def to_pascal_case(name: str) -> str:
        """将字符串转换为大驼峰风格（PascalCase）: indices.get -> IndicesGet, wait_for -> WaitFor"""
        # 处理特殊字符
        name = re.sub(r'[^a-zA-Z0-9_]', '_', str(name))
        name = re.sub(r'_+', '_', name).strip('_')
        if not name:
            return ''
        return camelize(name, uppercase_first_letter=True)

    @staticmethod
    def to_snake_case(name: str) -> str:
        """将字符串转换为蛇形命名（snake_case）"""
        name = re.sub(r'[^a-zA-Z0-9_]', '_', str(name))
        return re.sub(r'_+', '_', underscore(name)).strip('_')

    @staticmethod
    def safe_name(name: str) -> str:
        """生成安全的Python标识符，避免关键字冲突"""
        converted = NameStyleConverterMixin.to_snake_case(name)

        # 确保不是空字符串
        if not converted:
            converted = 'unnamed'

        # 确保不以数字开头
        if converted[0].isdigit():
            converted = 'n' + converted

        # 处理关键字冲突
        if keyword.iskeyword(converted) or converted in ('None', 'True', 'False'):
            converted += '_'

        return converted


def type_name(name: str) -> str:
    return NameStyleConverterMixin.to_pascal_case(name)


def valid_name(name: str) -> str:
    return NameStyleConverterMixin.safe_name(name)
