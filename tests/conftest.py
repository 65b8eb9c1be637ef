"""Pytest fixtures for aldoc tests."""

import tempfile
from pathlib import Path

import pytest

from aldoc.buffer import StringBuffer

SALES_CODEUNIT = '''codeunit 50100 "Sales Mgt." implements ISalesPost
{
    /// <summary>
    /// ${1:PostOrder.}
    /// </summary>
    /// <param name="SalesHeader">${2:VAR Record Sales Header.}</param>
    /// <returns>${3:Return value of type Boolean.}</returns>
    procedure PostOrder(var SalesHeader: Record "Sales Header"): Boolean
    begin
    end;

    local procedure CalcTotal(Qty: Decimal; Price: Decimal) Total: Decimal
    begin
    end;
}
'''


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sales_source():
    """AL source of a codeunit with one documented and one bare procedure."""
    return SALES_CODEUNIT


@pytest.fixture
def sales_buffer(sales_source):
    """Buffer over the sample codeunit."""
    return StringBuffer(sales_source)


@pytest.fixture
def sales_file(temp_dir, sales_source):
    """The sample codeunit written to disk."""
    path = temp_dir / "SalesMgt.Codeunit.al"
    path.write_text(sales_source)
    return path
