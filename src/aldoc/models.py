"""Descriptors for the AL constructs that receive documentation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ObjectType(Enum):
    """AL object kinds.

    The member name is what appears in generated documentation
    ("TableExtension"), the value is the AL keyword ("tableextension").
    """

    Table = "table"
    TableExtension = "tableextension"
    Page = "page"
    PageExtension = "pageextension"
    PageCustomization = "pagecustomization"
    Codeunit = "codeunit"
    Report = "report"
    ReportExtension = "reportextension"
    XmlPort = "xmlport"
    Query = "query"
    Enum = "enum"
    EnumExtension = "enumextension"
    Interface = "interface"
    ControlAddIn = "controladdin"
    Profile = "profile"
    PermissionSet = "permissionset"
    PermissionSetExtension = "permissionsetextension"
    Entitlement = "entitlement"

    @classmethod
    def from_keyword(cls, keyword: str) -> "ObjectType | None":
        """Look up an object type by its (case-insensitive) AL keyword."""
        try:
            return cls(keyword.lower())
        except ValueError:
            return None


class ExtensionType(Enum):
    """How an object relates to the object it builds on."""

    EXTENDS = "extends"
    IMPLEMENTS = "implements"


@dataclass
class ALObject:
    """An AL object declaration (table, codeunit, page extension, ...)."""

    type: ObjectType
    name: str
    id: int | None = None
    extension_type: ExtensionType | None = None
    extension_object: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.type.value,
            "name": self.name,
        }
        if self.id is not None:
            result["id"] = self.id
        if self.extension_type is not None:
            result["extension_type"] = self.extension_type.value
            result["extension_object"] = self.extension_object
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ALObject":
        extension_type = None
        if data.get("extension_type"):
            extension_type = ExtensionType(data["extension_type"])
        return cls(
            type=ObjectType(data["type"]),
            name=data["name"],
            id=data.get("id"),
            extension_type=extension_type,
            extension_object=data.get("extension_object"),
        )


@dataclass
class ALParameter:
    """A procedure parameter."""

    name: str
    type: str
    subtype: str | None = None
    temporary: bool = False
    call_by_reference: bool = False  # declared with "var"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "temporary": self.temporary,
            "call_by_reference": self.call_by_reference,
        }
        if self.subtype:
            result["subtype"] = self.subtype
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ALParameter":
        return cls(
            name=data["name"],
            type=data["type"],
            subtype=data.get("subtype"),
            temporary=data.get("temporary", False),
            call_by_reference=data.get("call_by_reference", False),
        )


@dataclass
class ALProcedureReturn:
    """The return value of a procedure. An unnamed return has name ""."""

    type: str
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ALProcedureReturn":
        return cls(type=data["type"], name=data.get("name") or "")


@dataclass
class ALProcedure:
    """A procedure with its parameters in declaration order."""

    name: str | None
    parameters: list[ALParameter] = field(default_factory=list)
    returns: ALProcedureReturn | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "parameters": [p.to_dict() for p in self.parameters],
        }
        if self.returns is not None:
            result["returns"] = self.returns.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ALProcedure":
        returns = None
        if data.get("returns"):
            returns = ALProcedureReturn.from_dict(data["returns"])
        return cls(
            name=data.get("name"),
            parameters=[ALParameter.from_dict(p) for p in data.get("parameters", [])],
            returns=returns,
        )
