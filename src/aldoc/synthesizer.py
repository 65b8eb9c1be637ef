"""XML documentation comment generation for AL constructs.

Each generator returns a fragment of `///`-prefixed lines holding exactly one
snippet placeholder. When no index is given the placeholder carries
PLACEHOLDER_MARKER instead of a number; `assemble` later numbers the
placeholders of a composite block so that tab stops run 1, 2, 3, ... across
the summary, the parameters and the return value.
"""

from collections.abc import Sequence

from .models import ALObject, ALParameter, ALProcedure, ALProcedureReturn, ExtensionType

COMMENT_PREFIX = "/// "
PLACEHOLDER_MARKER = "__idx__"


def placeholder(text: str, idx: int | None = None) -> str:
    """Build a snippet placeholder, `${idx:text}` or `${__idx__:text}`."""
    slot = PLACEHOLDER_MARKER if idx is None else str(idx)
    return "${" + slot + ":" + text + "}"


def resolve_placeholder(fragment: str, idx: int) -> str:
    """Replace the unresolved marker in a fragment with a tab-stop number."""
    return fragment.replace("${" + PLACEHOLDER_MARKER + ":", "${" + str(idx) + ":", 1)


def _summary_block(text: str, idx: int | None) -> str:
    return "\n".join(
        [
            f"{COMMENT_PREFIX}<summary>",
            f"{COMMENT_PREFIX}{placeholder(text, idx)}",
            f"{COMMENT_PREFIX}</summary>",
        ]
    )


def generate_object_doc(obj: ALObject, idx: int | None = None) -> str:
    """
    Generate the summary block for an AL object.

    Example placeholder text for `tableextension 50100 MyExt extends Customer`:
        "TableExtension MyExt (ID 50100) extends Record Customer."
    """
    text = f"{obj.type.name} {obj.name}"
    if obj.id is not None:
        text += f" (ID {obj.id})"
    if obj.extension_type is ExtensionType.EXTENDS:
        text += f" extends Record {obj.extension_object}"
    elif obj.extension_type is ExtensionType.IMPLEMENTS:
        text += f" implements Interface {obj.extension_object}"
    return _summary_block(text + ".", idx)


def generate_procedure_summary(procedure: ALProcedure, idx: int | None = None) -> str:
    """Generate the summary block for a procedure, or "" if it has no name yet."""
    if not procedure.name:
        return ""
    return _summary_block(f"{procedure.name}.", idx)


def generate_parameter_doc(parameter: ALParameter, idx: int | None = None) -> str:
    """
    Generate the <param> line for a procedure parameter.

    The parameter name goes into the attribute as-is. AL identifiers that need
    quoting (e.g. containing '"') produce an attribute that does not parse.
    """
    text = ""
    if parameter.temporary:
        text += "Temporary "
    if parameter.call_by_reference:
        text += "VAR "
    text += parameter.type
    if parameter.subtype:
        text += f" {parameter.subtype}"
    return (
        f'{COMMENT_PREFIX}<param name="{parameter.name}">'
        f"{placeholder(text + '.', idx)}</param>"
    )


def generate_return_doc(returns: ALProcedureReturn, idx: int | None = None) -> str:
    """Generate the <returns> line for a procedure return value."""
    if returns.name:
        text = f"Return variable {returns.name} of type {returns.type}."
    else:
        text = f"Return value of type {returns.type}."
    return f"{COMMENT_PREFIX}<returns>{placeholder(text, idx)}</returns>"


def assemble(
    summary: str,
    parameter_fragments: Sequence[str] = (),
    return_fragment: str | None = None,
) -> str:
    """
    Join unresolved fragments into one block with sequential tab stops.

    Numbering: summary is 1, parameters follow in declaration order, the
    return value comes last.

    Args:
        summary: Summary fragment from generate_procedure_summary.
        parameter_fragments: Parameter fragments in declaration order.
        return_fragment: Return fragment, if the procedure returns a value.

    Returns:
        The multi-line block, or "" when there is no summary.
    """
    if not summary:
        return ""

    idx = 1
    parts = [resolve_placeholder(summary, idx)]
    for fragment in parameter_fragments:
        idx += 1
        parts.append(resolve_placeholder(fragment, idx))
    if return_fragment:
        idx += 1
        parts.append(resolve_placeholder(return_fragment, idx))
    return "\n".join(parts)


def generate_procedure_doc(procedure: ALProcedure) -> str:
    """Generate the complete documentation block for a procedure."""
    summary = generate_procedure_summary(procedure)
    parameter_fragments = [generate_parameter_doc(p) for p in procedure.parameters]
    return_fragment = None
    if procedure.returns is not None:
        return_fragment = generate_return_doc(procedure.returns)
    return assemble(summary, parameter_fragments, return_fragment)


def generate_doc(construct: ALObject | ALProcedure) -> str:
    """Generate documentation for an object or a procedure declaration."""
    if isinstance(construct, ALObject):
        return generate_object_doc(construct, 1)
    return generate_procedure_doc(construct)


def indent_block(block: str, column: int) -> str:
    """Indent every line of a block to the given column."""
    pad = " " * column
    return "\n".join(pad + line for line in block.split("\n"))
