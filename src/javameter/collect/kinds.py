"""Declaration classifier: kinds and names of types, methods and fields."""

from __future__ import annotations

from ..exceptions import UnclassifiedNodeError
from ..metrics import FieldKind, MethodKind, TypeKind
from ..syntax.nodes import (
    AnnotationDeclaration,
    AnnotationMemberDeclaration,
    ClassDeclaration,
    ConstructorDeclaration,
    EnumConstantDeclaration,
    EnumDeclaration,
    FieldDeclaration,
    InitializerDeclaration,
    InterfaceDeclaration,
    MethodDeclaration,
    Modifier,
    Node,
    ObjectCreationExpr,
    RecordDeclaration,
)

ANONYMOUS_PREFIX = "Anonymous$"
STATIC_INITIALIZER_NAME = "clinit"
INSTANCE_INITIALIZER_NAME = "init"


def type_kind(node: Node) -> TypeKind:
    match node:
        case ClassDeclaration():
            return TypeKind.CLASS
        case InterfaceDeclaration():
            return TypeKind.INTERFACE
        case EnumDeclaration():
            return TypeKind.ENUM
        case AnnotationDeclaration():
            return TypeKind.ANNOTATION
        case RecordDeclaration():
            return TypeKind.RECORD
        case EnumConstantDeclaration(body=body) if body is not None:
            return TypeKind.ENUM_CONSTANT
        case ObjectCreationExpr(body=body) if body is not None:
            return TypeKind.ANONYMOUS_CLASS
        case _:
            raise UnclassifiedNodeError(node, "type")


def type_name(node: Node) -> str:
    if isinstance(node, ObjectCreationExpr):
        return ANONYMOUS_PREFIX + simple_type_name(node.type_name)
    return node.name  # type: ignore[attr-defined]


def simple_type_name(type_name: str) -> str:
    """``java.util.Map.Entry<K, V>`` -> ``Entry``; type annotations are dropped."""
    base = type_name.split("<", 1)[0].strip()
    if not base:
        return type_name
    return base.split()[-1].rsplit(".", 1)[-1]


def method_kind(node: Node, enclosing: Node) -> MethodKind:
    """Kind of a method, constructor or initializer declared in ``enclosing``.

    For methods the first matching rule wins: default, static, abstract,
    native, body-less inside an interface, and instance method otherwise.
    """
    match node:
        case ConstructorDeclaration():
            return MethodKind.CONSTRUCTOR
        case InitializerDeclaration(is_static=True):
            return MethodKind.STATIC_INITIALIZER
        case InitializerDeclaration():
            return MethodKind.INSTANCE_INITIALIZER
        case MethodDeclaration(modifiers=modifiers, body=body):
            if Modifier.DEFAULT in modifiers:
                return MethodKind.DEFAULT_METHOD
            if Modifier.STATIC in modifiers:
                return MethodKind.STATIC_METHOD
            if Modifier.ABSTRACT in modifiers:
                return MethodKind.ABSTRACT_METHOD
            if Modifier.NATIVE in modifiers:
                return MethodKind.NATIVE_METHOD
            if body is None and isinstance(enclosing, InterfaceDeclaration):
                return MethodKind.ABSTRACT_METHOD
            return MethodKind.INSTANCE_METHOD
        case _:
            raise UnclassifiedNodeError(node, "method")


def method_name(node: Node) -> str:
    """``int size()``, ``Point(int, int)``, ``clinit`` or ``init``."""
    match node:
        case InitializerDeclaration(is_static=True):
            return STATIC_INITIALIZER_NAME
        case InitializerDeclaration():
            return INSTANCE_INITIALIZER_NAME
        case ConstructorDeclaration(name=name, parameters=parameters):
            return f"{name}({', '.join(p.type_name for p in parameters)})"
        case MethodDeclaration(name=name, parameters=parameters, return_type=return_type):
            return f"{return_type} {name}({', '.join(p.type_name for p in parameters)})"
        case _:
            raise UnclassifiedNodeError(node, "method")


def field_kind(node: Node, enclosing: Node) -> FieldKind:
    match node:
        case EnumConstantDeclaration(body=None):
            return FieldKind.ENUM_CONSTANT
        case AnnotationMemberDeclaration():
            return FieldKind.ANNOTATION_TYPE_ELEMENT
        case FieldDeclaration(modifiers=modifiers):
            # Interface and annotation fields are implicitly static.
            if Modifier.STATIC in modifiers or isinstance(
                enclosing, (InterfaceDeclaration, AnnotationDeclaration)
            ):
                return FieldKind.STATIC_FIELD
            return FieldKind.INSTANCE_FIELD
        case _:
            raise UnclassifiedNodeError(node, "field")
