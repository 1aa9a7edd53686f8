import pytest

from tests.fakes import DictGraph


@pytest.fixture
def graph() -> DictGraph:
    return DictGraph()


@pytest.fixture
def single_page_form(graph: DictGraph):
    page = graph.add_page()
    graph.add_form()
    return graph, page
