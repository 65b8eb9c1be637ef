"""aldoc - XML documentation comments for AL source."""

__version__ = "0.1.0"

from .locator import (
    extract_tag,
    find_doc_block_end,
    line_indent_column,
    parse_doc_xml,
)
from .models import (
    ALObject,
    ALParameter,
    ALProcedure,
    ALProcedureReturn,
    ExtensionType,
    ObjectType,
)
from .synthesizer import (
    assemble,
    generate_object_doc,
    generate_parameter_doc,
    generate_procedure_doc,
    generate_procedure_summary,
    generate_return_doc,
)

__all__ = [
    # Descriptors
    "ALObject",
    "ALParameter",
    "ALProcedure",
    "ALProcedureReturn",
    "ExtensionType",
    "ObjectType",
    # Generation
    "generate_object_doc",
    "generate_procedure_summary",
    "generate_parameter_doc",
    "generate_return_doc",
    "generate_procedure_doc",
    "assemble",
    # Locating
    "parse_doc_xml",
    "extract_tag",
    "find_doc_block_end",
    "line_indent_column",
]
