"""Tests for the tool-calling interface and MCP server wiring."""

import asyncio
from pathlib import Path

import pytest
from pydantic import ValidationError

from heapgraph_cli import tools
from heapgraph_cli.server import build_server


class TestTools:
    """Tests for the markdown-returning tool functions."""

    def test_top_by_inclusive_size(self, leaky_snapshot_path: Path):
        text = tools.analyze_top_by_inclusive_size(str(leaky_snapshot_path), 2)

        lines = text.splitlines()
        assert lines[0].startswith("Object Type")
        assert len(lines) == 4
        assert lines[2].startswith("App.MainPage")
        assert lines[2].endswith("2,740")

    def test_top_by_size(self, leaky_snapshot_path: Path):
        text = tools.analyze_top_by_size(str(leaky_snapshot_path), 1)

        assert text.splitlines()[2].startswith("System.Byte[]")

    def test_top_by_count(self, leaky_snapshot_path: Path):
        text = tools.analyze_top_by_count(str(leaky_snapshot_path), 1)

        assert text.splitlines()[2].startswith("App.LeakyPage")

    def test_by_name(self, leaky_snapshot_path: Path):
        text = tools.analyze_by_name(str(leaky_snapshot_path), "leakypage")

        assert len(text.splitlines()) == 4

    def test_paths_to_root(self, leaky_snapshot_path: Path):
        text = tools.paths_to_root(str(leaky_snapshot_path), "LeakyPage")

        assert text.startswith("├── App.LeakyPage (Count: 3)")

    def test_paths_to_root_no_match(self, leaky_snapshot_path: Path):
        assert tools.paths_to_root(str(leaky_snapshot_path), "no-such-type") == ""

    def test_missing_file(self, temp_dir: Path):
        missing = str(temp_dir / "no-such-file.json")

        with pytest.raises(FileNotFoundError):
            tools.analyze_top_by_inclusive_size(missing, 1)
        with pytest.raises(FileNotFoundError):
            tools.analyze_top_by_size(missing, 1)
        with pytest.raises(FileNotFoundError):
            tools.analyze_top_by_count(missing, 1)
        with pytest.raises(FileNotFoundError):
            tools.analyze_by_name(missing, "x")
        with pytest.raises(FileNotFoundError):
            tools.paths_to_root(missing, "x")

    def test_directory_is_not_a_snapshot(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            tools.analyze_top_by_count(str(temp_dir), 1)

    def test_rejects_blank_name(self, leaky_snapshot_path: Path):
        with pytest.raises(ValidationError):
            tools.analyze_by_name(str(leaky_snapshot_path), "")
        with pytest.raises(ValidationError):
            tools.paths_to_root(str(leaky_snapshot_path), "  ")

    def test_rejects_non_positive_rows(self, leaky_snapshot_path: Path):
        with pytest.raises(ValidationError):
            tools.analyze_top_by_size(str(leaky_snapshot_path), 0)


class TestServer:
    """Tests for MCP server registration."""

    def test_registers_every_tool(self):
        server = build_server()

        names = {tool.name for tool in asyncio.run(server.list_tools())}

        assert names == {fn.__name__ for fn in tools.TOOLS}

    def test_server_is_fastmcp_with_descriptions(self):
        from mcp.server.fastmcp import FastMCP

        server = build_server()

        assert isinstance(server, FastMCP)
        assert server.name == "heapgraph"
        described = {tool.name: tool.description for tool in asyncio.run(server.list_tools())}
        assert described["paths_to_root"] == tools.paths_to_root.__doc__
