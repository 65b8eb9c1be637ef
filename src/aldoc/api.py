"""FastAPI REST API for aldoc documentation generation."""

import os
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import __version__
from .buffer import StringBuffer
from .declarations import find_declaration
from .errors import (
    AldocError,
    DeclarationNotFoundError,
    InvalidLineRangeError,
    InvalidLocationError,
    SourceFileNotFoundError,
)
from .locator import (
    doc_block_above,
    extract_tag,
    find_doc_block_end,
    find_doc_block_start,
    line_indent_column,
    parse_doc_xml,
)
from .models import (
    ALObject,
    ALProcedure,
    ExtensionType,
    ObjectType,
)
from .synthesizer import generate_doc, generate_object_doc, generate_procedure_doc
from .utils import line_index

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]


def cors_origins() -> list[str]:
    """CORS origins from ALDOC_CORS_ORIGINS (comma separated), else local defaults."""
    configured = os.environ.get("ALDOC_CORS_ORIGINS", "")
    origins = [o.strip() for o in configured.split(",") if o.strip()]
    return origins or DEFAULT_CORS_ORIGINS


# --- Pydantic Schemas ---


class ObjectDocRequest(BaseModel):
    """Request body for object documentation."""

    type: ObjectType = Field(..., description="AL object keyword, e.g. 'tableextension'")
    name: str
    id: Optional[int] = None
    extension_type: Optional[ExtensionType] = None
    extension_object: Optional[str] = None
    idx: int = Field(default=1, ge=1, description="Snippet placeholder index")


class ParameterSchema(BaseModel):
    name: str
    type: str
    subtype: Optional[str] = None
    temporary: bool = False
    call_by_reference: bool = False


class ReturnSchema(BaseModel):
    type: str
    name: str = ""


class ProcedureDocRequest(BaseModel):
    """Request body for procedure documentation."""

    name: Optional[str] = None
    parameters: list[ParameterSchema] = Field(default_factory=list)
    returns: Optional[ReturnSchema] = None


class DocumentationResponse(BaseModel):
    documentation: str


class SourceLineRequest(BaseModel):
    """A source text and a 1-based line in it."""

    source: str
    line: int = Field(..., ge=1)


class DeclarationDocResponse(BaseModel):
    kind: str  # "object"|"procedure"
    declaration: dict[str, Any]
    documentation: str
    indent: int


class ExtractRequest(BaseModel):
    documentation: str
    tag: str
    attr_name: str = ""
    attr_value: str = ""


class ExtractResponse(BaseModel):
    found: bool
    fragment: str


class ParseRequest(BaseModel):
    documentation: str


class ParseResponse(BaseModel):
    valid: bool
    tree: Optional[dict[str, Any]] = None


class BlockEndResponse(BaseModel):
    found: bool
    start_line: Optional[int] = None  # 1-based first comment line
    end_line: Optional[int] = None  # 1-based last comment line
    block: str = ""


class ErrorResponse(BaseModel):
    detail: str
    error_type: str


# --- Helper Functions ---


def object_from_request(request: ObjectDocRequest) -> ALObject:
    """Convert an object request to the ALObject descriptor."""
    return ALObject.from_dict(request.model_dump(mode="json", exclude={"idx"}))


def procedure_from_request(request: ProcedureDocRequest) -> ALProcedure:
    """Convert a procedure request to the ALProcedure descriptor."""
    return ALProcedure.from_dict(request.model_dump())


app = FastAPI(
    title="aldoc API",
    description="REST API for AL XML documentation comments",
    version=__version__,
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Global Exception Handler ---


# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    InvalidLocationError: 400,
    InvalidLineRangeError: 400,
    SourceFileNotFoundError: 404,
    DeclarationNotFoundError: 404,
}


@app.exception_handler(AldocError)
async def aldoc_error_handler(request: Request, exc: AldocError) -> JSONResponse:
    """Map AldocError subclasses to appropriate HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


# --- Endpoints ---


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.post("/api/docs/object", response_model=DocumentationResponse)
def document_object(request: ObjectDocRequest):
    """Generate the summary block for an object."""
    obj = object_from_request(request)
    return DocumentationResponse(documentation=generate_object_doc(obj, request.idx))


@app.post("/api/docs/procedure", response_model=DocumentationResponse)
def document_procedure(request: ProcedureDocRequest):
    """
    Generate the full documentation block for a procedure.

    A procedure without a name yields an empty documentation string.
    """
    procedure = procedure_from_request(request)
    return DocumentationResponse(documentation=generate_procedure_doc(procedure))


@app.post("/api/docs/declaration", response_model=DeclarationDocResponse)
def document_declaration(request: SourceLineRequest):
    """Generate documentation for the declaration on a line of source."""
    buffer = StringBuffer(request.source)
    idx = line_index(buffer, request.line)

    construct = find_declaration(buffer, idx)
    if construct is None:
        raise DeclarationNotFoundError(request.line, buffer.line_at(idx))

    return DeclarationDocResponse(
        kind="object" if isinstance(construct, ALObject) else "procedure",
        declaration=construct.to_dict(),
        documentation=generate_doc(construct),
        indent=line_indent_column(buffer, idx),
    )


@app.post("/api/docs/extract", response_model=ExtractResponse)
def extract_documentation_tag(request: ExtractRequest):
    """Extract one tag from a documentation block."""
    fragment = extract_tag(
        request.documentation, request.tag, request.attr_name, request.attr_value
    )
    return ExtractResponse(found=bool(fragment), fragment=fragment)


@app.post("/api/docs/parse", response_model=ParseResponse)
def parse_documentation(request: ParseRequest):
    """Parse a documentation block into a tree."""
    tree = parse_doc_xml(request.documentation)
    return ParseResponse(valid=tree is not None, tree=tree)


@app.post("/api/docs/block-end", response_model=BlockEndResponse)
def locate_documentation_block(request: SourceLineRequest):
    """Locate the documentation block directly above a line."""
    buffer = StringBuffer(request.source)
    idx = line_index(buffer, request.line)

    end = find_doc_block_end(buffer, idx)
    if end == -1:
        return BlockEndResponse(found=False)

    return BlockEndResponse(
        found=True,
        start_line=find_doc_block_start(buffer, idx) + 1,
        end_line=end,
        block=doc_block_above(buffer, idx),
    )
