"""Metrics for named code elements: types, methods and fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .comments import CommentMetrics
from .statements import StatementMetrics


class TypeKind(Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ENUM_CONSTANT = "enum_constant"  # enum constant with a class body
    ANNOTATION = "annotation"
    ANONYMOUS_CLASS = "anonymous_class"
    RECORD = "record"


class MethodKind(Enum):
    CONSTRUCTOR = "constructor"
    INSTANCE_INITIALIZER = "instance_initializer"
    STATIC_INITIALIZER = "static_initializer"
    INSTANCE_METHOD = "instance_method"
    STATIC_METHOD = "static_method"
    ABSTRACT_METHOD = "abstract_method"
    DEFAULT_METHOD = "default_method"
    NATIVE_METHOD = "native_method"


class FieldKind(Enum):
    STATIC_FIELD = "static_field"
    INSTANCE_FIELD = "instance_field"
    ENUM_CONSTANT = "enum_constant"
    ANNOTATION_TYPE_ELEMENT = "annotation_type_element"


@dataclass
class CodeElementMetrics:
    """Base of every named metrics node: a name and the comments attributed to it."""

    name: str
    comments: CommentMetrics = field(default_factory=CommentMetrics, kw_only=True)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError(f"{type(self).__name__} requires a name")


@dataclass
class FieldMetrics(CodeElementMetrics):
    """One variable declarator, enum constant or annotation element."""

    kind: FieldKind
    statements: StatementMetrics = field(default_factory=StatementMetrics, kw_only=True)


@dataclass
class MethodMetrics(CodeElementMetrics):
    """A method, constructor or initializer with the types declared in its body."""

    kind: MethodKind
    statements: StatementMetrics = field(default_factory=StatementMetrics, kw_only=True)
    local_types: list[TypeMetrics] = field(default_factory=list, kw_only=True)

    def add_local_type(self, metrics: TypeMetrics) -> None:
        self.local_types.append(metrics)


@dataclass
class TypeMetrics(CodeElementMetrics):
    kind: TypeKind
    fields: list[FieldMetrics] = field(default_factory=list, kw_only=True)
    methods: list[MethodMetrics] = field(default_factory=list, kw_only=True)
    inner_types: list[TypeMetrics] = field(default_factory=list, kw_only=True)

    def add_field(self, metrics: FieldMetrics) -> None:
        self.fields.append(metrics)

    def add_method(self, metrics: MethodMetrics) -> None:
        self.methods.append(metrics)

    def add_inner_type(self, metrics: TypeMetrics) -> None:
        self.inner_types.append(metrics)
