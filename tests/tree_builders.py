"""Builders for DDL tree dumps in the parser's nested JSON shape.

WHY: A real parser dump buries every name four levels deep. Tests read
much better when a tree is written as
``tree(protocol("Friends", [method("Ping", [])]))``.
"""

from typing import Any, Dict, List, Optional


def named(value: Optional[str]) -> Dict[str, Any]:
    return {"nameSpaceItem": {"parseTreeItem1": {"name": {"value": value}}}}


def type_use(value: str) -> Dict[str, Any]:
    return {"name": {"value": value}}


def parameter(name: str, type_: str, direction: int, return_value: bool = False) -> Dict[str, Any]:
    return {"body": {
        "kind": "DDLReturnValue" if return_value else "DDLParameter",
        "type": direction,
        "variable": named(name),
        "declarationUse": type_use(type_),
    }}


def method(name: str, parameters: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"body": {
        "methodDeclaration": {"declaration": named(name)},
        "parameters": {"elements": parameters},
    }}


def protocol(name: Optional[str], methods: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"body": {
        "kind": "DDLProtocolDeclaration",
        "declaration": named(name),
        "methods": {"elements": methods},
    }}


def member(name: str, type_: str) -> Dict[str, Any]:
    return {"body": {**named(name), "declarationUse": type_use(type_)}}


def structure(name: str, members: List[Dict[str, Any]], parent: str = "") -> Dict[str, Any]:
    return {"body": {
        "kind": "DDLClassDeclaration",
        "typeDeclaration": {"declaration": named(name)},
        "parentClassName": {"value": parent},
        "classMembers": {"elements": members},
    }}


def other(kind: str = "DDLUnitDeclaration") -> Dict[str, Any]:
    return {"body": {"kind": kind}}


def tree(*elements: Dict[str, Any]) -> Dict[str, Any]:
    return {"rootNamespace": {"elements": list(elements)}}
