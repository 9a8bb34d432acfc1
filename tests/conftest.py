"""Pytest configuration and fixtures for HeapGraph CLI tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from heapgraph_cli.graph import GraphBuilder, ObjectGraph


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch):
    """Point the config file at a per-test location so ~/.heapgraph is never touched."""
    monkeypatch.setattr("heapgraph_cli.config.CONFIG_FILE", tmp_path / "home" / "config.toml")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def leaky_snapshot_path() -> Path:
    """Snapshot with a page leaked through a static list.

    Reachable layout (sizes in parentheses)::

        [root] -> [static vars] -> App.MainPage(100) -> List<LeakyPage>(40) -> LeakyPage(200) -> Byte[](1000)
                                                                             -> LeakyPage(200) -> Byte[](1000)
                                                      -> LeakyPage(200)
               -> System.String(30)

    plus one unreachable System.String(50).
    """
    return Path(__file__).parent / "fixtures" / "leaky_page.json"


@pytest.fixture
def linear_graph() -> ObjectGraph:
    """R -> A(10) -> B(20) -> C(30)."""
    b = GraphBuilder()
    root = b.add_node("[root]")
    a = b.add_node("A", 10)
    bb = b.add_node("B", 20)
    c = b.add_node("C", 30)
    b.add_edge(root, a)
    b.add_edge(a, bb)
    b.add_edge(bb, c)
    return b.build(root)


@pytest.fixture
def same_type_chain_graph() -> ObjectGraph:
    """R -> Holder(5) -> Link(10) -> Link(10) -> Link(10)."""
    b = GraphBuilder()
    root = b.add_node("[root]")
    holder = b.add_node("Holder", 5)
    b.add_edge(root, holder)
    previous = holder
    for _ in range(3):
        link = b.add_node("Link", 10)
        b.add_edge(previous, link)
        previous = link
    return b.build(root)


@pytest.fixture
def cyclic_graph() -> ObjectGraph:
    """R -> A(1) <-> B(2) -> C(4), C -> A, plus a self loop on C and an edge back to R."""
    b = GraphBuilder()
    root = b.add_node("[root]")
    a = b.add_node("A", 1)
    bb = b.add_node("B", 2)
    c = b.add_node("C", 4)
    b.add_edge(root, a)
    b.add_edge(a, bb)
    b.add_edge(bb, a)
    b.add_edge(bb, c)
    b.add_edge(c, a)
    b.add_edge(c, c)
    b.add_edge(c, root)
    return b.build(root)
