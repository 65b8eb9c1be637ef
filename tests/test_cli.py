"""Tests for the aldoc command line."""

import json

import pytest

from aldoc.cli import main


class TestDocCommand:
    def test_procedure_doc_is_indented(self, sales_file, capsys):
        assert main(["doc", f"{sales_file}:12"]) == 0
        out = capsys.readouterr().out.rstrip("\n").split("\n")
        assert out == [
            "    /// <summary>",
            "    /// ${1:CalcTotal.}",
            "    /// </summary>",
            '    /// <param name="Qty">${2:Decimal.}</param>',
            '    /// <param name="Price">${3:Decimal.}</param>',
            "    /// <returns>${4:Return variable Total of type Decimal.}</returns>",
        ]

    def test_object_doc_json(self, sales_file, capsys):
        assert main(["doc", f"{sales_file}:1", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["kind"] == "object"
        assert data["declaration"]["type"] == "codeunit"
        assert data["indent"] == 0
        assert "Codeunit Sales Mgt. (ID 50100) implements Interface ISalesPost." in (
            data["documentation"]
        )

    def test_no_declaration(self, sales_file, capsys):
        assert main(["doc", f"{sales_file}:9"]) == 1
        assert "No object or procedure declaration on line 9" in capsys.readouterr().err

    def test_missing_file(self, temp_dir, capsys):
        assert main(["doc", f"{temp_dir / 'Missing.al'}:1"]) == 1
        assert "Source file not found" in capsys.readouterr().err

    def test_line_past_end(self, sales_file, capsys):
        assert main(["doc", f"{sales_file}:99"]) == 1
        assert "Invalid line 99" in capsys.readouterr().err

    def test_bad_location(self, capsys):
        assert main(["doc", "Sales.al"]) == 1
        assert "Invalid location" in capsys.readouterr().err


class TestExtractCommand:
    def test_extract_param(self, sales_file, capsys):
        assert main(["extract", f"{sales_file}:8", "param", "--attr", "name=SalesHeader"]) == 0
        out = capsys.readouterr().out.strip()
        assert out == '/// <param name="SalesHeader">${2:VAR Record Sales Header.}</param>'

    def test_extract_summary(self, sales_file, capsys):
        assert main(["extract", f"{sales_file}:8", "summary"]) == 0
        assert capsys.readouterr().out.strip().endswith("/// </summary>")

    def test_tag_not_found(self, sales_file, capsys):
        assert main(["extract", f"{sales_file}:8", "remarks"]) == 0
        assert "No <remarks> found" in capsys.readouterr().out

    def test_no_documentation(self, sales_file, capsys):
        assert main(["extract", f"{sales_file}:12", "summary"]) == 0
        assert "No documentation above line 12" in capsys.readouterr().out


class TestParseCommand:
    def test_parse(self, sales_file, capsys):
        assert main(["parse", f"{sales_file}:8"]) == 0
        tree = json.loads(capsys.readouterr().out)
        assert tree["summary"] == "${1:PostOrder.}"
        assert tree["param"]["attr"]["name"] == "SalesHeader"

    def test_malformed(self, temp_dir, capsys):
        path = temp_dir / "Broken.al"
        path.write_text("/// <summary>\n/// Broken.\nprocedure Run()\n")
        assert main(["parse", f"{path}:3"]) == 1
        assert "not well-formed XML" in capsys.readouterr().err


class TestBlockEndCommand:
    def test_block(self, sales_file, capsys):
        assert main(["block-end", f"{sales_file}:8"]) == 0
        assert "Documentation block: lines 3-7" in capsys.readouterr().out

    def test_block_json(self, sales_file, capsys):
        assert main(["block-end", f"{sales_file}:8", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == {"start_line": 3, "end_line": 7}

    def test_no_block(self, sales_file, capsys):
        assert main(["block-end", f"{sales_file}:12", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == {"start_line": None, "end_line": None}


class TestParser:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: aldoc" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "aldoc 0.1.0" in capsys.readouterr().out
