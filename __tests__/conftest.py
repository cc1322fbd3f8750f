import pytest

from graphnote.block import Document, default_schema
from graphnote.mention import InMemoryGraphSearch, MentionResolver, sample_candidates


@pytest.fixture
def schema():
    return default_schema()


@pytest.fixture
def doc(schema):
    return Document.from_template(schema, [
        {"type": "heading", "props": {"level": 2}, "content": "Title"},
        {"type": "paragraph", "content": "hello"},
        {"type": "bulletListItem", "content": "a"},
        {"type": "bulletListItem", "content": "b"},
    ])


@pytest.fixture
def search():
    return InMemoryGraphSearch(sample_candidates())


@pytest.fixture
def resolver(search):
    return MentionResolver(search, timeout=0.5)
