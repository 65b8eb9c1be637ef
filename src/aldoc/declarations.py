"""Reading AL object and procedure declarations into descriptors.

Only the declaration line itself is read; bodies, attributes on preceding
lines and multi-line signatures are out of reach.
"""

import re

from .buffer import TextBuffer
from .models import (
    ALObject,
    ALParameter,
    ALProcedure,
    ALProcedureReturn,
    ExtensionType,
    ObjectType,
)

IDENTIFIER = r'(?:"[^"]+"|\w+)'

OBJECT_PATTERN = re.compile(
    rf"^\s*(?P<keyword>[A-Za-z]+)\s+(?:(?P<id>\d+)\s+)?(?P<name>{IDENTIFIER})(?P<rest>.*)$"
)
EXTENDS_PATTERN = re.compile(rf"\bextends\s+(?P<target>{IDENTIFIER})", re.IGNORECASE)
IMPLEMENTS_PATTERN = re.compile(
    rf"\bimplements\s+(?P<targets>{IDENTIFIER}(?:\s*,\s*{IDENTIFIER})*)", re.IGNORECASE
)

# [attributes] local procedure Name(params): ReturnType
PROCEDURE_PATTERN = re.compile(
    rf"^\s*(?:\[.*?\]\s*)*(?:(?:local|internal|protected)\s+)?(?:procedure|trigger)\s+"
    rf"(?P<name>{IDENTIFIER})\s*\((?P<params>.*)\)(?P<rest>[^)]*)$",
    re.IGNORECASE,
)
PARAMETER_PATTERN = re.compile(
    rf"^\s*(?P<var>var\s+)?(?P<name>{IDENTIFIER})\s*:\s*(?P<type>.+?)\s*$",
    re.IGNORECASE,
)
NAMED_RETURN_PATTERN = re.compile(rf"^(?P<name>{IDENTIFIER})\s*:\s*(?P<type>.+)$")
TEMPORARY_SUFFIX = re.compile(r"\s+temporary$", re.IGNORECASE)
SUBTYPED_PATTERN = re.compile(r"^(?P<type>\w+)\s+(?P<subtype>.+)$")


def _unquote(identifier: str) -> str:
    if len(identifier) >= 2 and identifier.startswith('"') and identifier.endswith('"'):
        return identifier[1:-1]
    return identifier


def parse_object_declaration(line: str) -> ALObject | None:
    """
    Parse an object declaration line.

    Formats:
    - table 18 Customer
    - tableextension 50100 "My Customer Ext" extends Customer
    - codeunit 50101 "Sales Mgt." implements "ISales", IPost
    - interface IPost

    Returns:
        ALObject, or None if the line does not declare an object.
    """
    match = OBJECT_PATTERN.match(line)
    if not match:
        return None
    object_type = ObjectType.from_keyword(match.group("keyword"))
    if object_type is None:
        return None

    obj = ALObject(
        type=object_type,
        name=_unquote(match.group("name")),
        id=int(match.group("id")) if match.group("id") else None,
    )

    rest = match.group("rest")
    extends = EXTENDS_PATTERN.search(rest)
    implements = IMPLEMENTS_PATTERN.search(rest)
    if extends:
        obj.extension_type = ExtensionType.EXTENDS
        obj.extension_object = _unquote(extends.group("target"))
    elif implements:
        targets = [_unquote(t.strip()) for t in implements.group("targets").split(",")]
        obj.extension_type = ExtensionType.IMPLEMENTS
        obj.extension_object = ", ".join(targets)
    return obj


def parse_parameter(declaration: str) -> ALParameter | None:
    """Parse one parameter, e.g. 'var Cust: Record Customer temporary'."""
    match = PARAMETER_PATTERN.match(declaration)
    if not match:
        return None

    type_text = match.group("type")
    temporary = False
    if TEMPORARY_SUFFIX.search(type_text):
        temporary = True
        type_text = TEMPORARY_SUFFIX.sub("", type_text)

    param_type, subtype = type_text, None
    subtyped = SUBTYPED_PATTERN.match(type_text)
    if subtyped and not type_text.lower().startswith("array"):
        param_type = subtyped.group("type")
        subtype = _unquote(subtyped.group("subtype").strip())

    return ALParameter(
        name=_unquote(match.group("name")),
        type=param_type,
        subtype=subtype,
        temporary=temporary,
        call_by_reference=match.group("var") is not None,
    )


def parse_procedure_declaration(line: str) -> ALProcedure | None:
    """
    Parse a procedure declaration line.

    Formats:
    - procedure Post(var SalesHeader: Record "Sales Header"; Preview: Boolean)
    - local procedure GetTotal(): Decimal
    - procedure TryFind(No: Code[20]) Found: Boolean

    Returns:
        ALProcedure, or None if the line does not declare a procedure.
    """
    match = PROCEDURE_PATTERN.match(line)
    if not match:
        return None

    parameters = []
    params_text = match.group("params")
    if params_text.strip():
        for declaration in params_text.split(";"):
            parameter = parse_parameter(declaration)
            if parameter is not None:
                parameters.append(parameter)

    return ALProcedure(
        name=_unquote(match.group("name")),
        parameters=parameters,
        returns=_parse_return(match.group("rest")),
    )


def _parse_return(rest: str) -> ALProcedureReturn | None:
    rest = rest.strip().rstrip(";").strip()
    if rest.startswith(":"):
        rest = rest[1:].strip()
    if not rest:
        return None

    named = NAMED_RETURN_PATTERN.match(rest)
    if named:
        return ALProcedureReturn(
            type=named.group("type").strip(), name=_unquote(named.group("name"))
        )
    return ALProcedureReturn(type=rest)


def find_declaration(buffer: TextBuffer, line_no: int) -> ALObject | ALProcedure | None:
    """Return the object or procedure declared on a line, if any."""
    if line_no < 0 or line_no >= buffer.line_count():
        return None
    line = buffer.line_at(line_no)
    return parse_procedure_declaration(line) or parse_object_declaration(line)
