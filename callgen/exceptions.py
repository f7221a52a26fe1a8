# --coding:utf-8--
from contextlib import contextmanager
from typing import Iterable, List


class CallGenException(Exception):
    pass


class SchemaError(CallGenException):
    """The API schema itself is malformed."""


class GenerationError(CallGenException):
    """One failure while translating a single call record."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class UnknownOperation(GenerationError):
    def __init__(self, call: str):
        self.call = call
        super().__init__(f"no API found for `{call}`")


class UnresolvedArgument(GenerationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no URL part found for `{name}`")


class AmbiguousOrMissingTemplate(GenerationError):
    pass


class TypeCoercionFailure(GenerationError):
    pass


class EnumValidationFailure(GenerationError):
    def __init__(self, options: Iterable[str], value: str):
        self.options = list(options)
        self.value = value
        super().__init__(f"options {self.options} does not contain value `{value}`")


class UnsupportedValueShape(GenerationError):
    pass


class InvalidStep(GenerationError):
    pass


class GenerationErrors(CallGenException):
    """All failures accumulated for one call record."""

    def __init__(self, errors: List[GenerationError]):
        self.errors = list(errors)
        super().__init__(str(self))

    def __str__(self):
        return "; ".join(str(e) for e in self.errors)

    def __iter__(self):
        return iter(self.errors)

    def __len__(self):
        return len(self.errors)


class ErrorCollector:
    """
    收集相互独立的子计算产生的错误，全部执行完后再统一抛出
    usage:
        collector = ErrorCollector()
        for name, value in params:
            with collector.catch():
                coerce(name, value)
        collector.raise_if_any()
    """

    def __init__(self):
        self.errors: List[GenerationError] = []

    @contextmanager
    def catch(self):
        try:
            yield
        except GenerationErrors as e:
            self.errors.extend(e.errors)
        except GenerationError as e:
            self.errors.append(e)

    def add(self, error: GenerationError):
        self.errors.append(error)

    def raise_if_any(self):
        if self.errors:
            raise GenerationErrors(self.errors)

    def __bool__(self):
        return bool(self.errors)
