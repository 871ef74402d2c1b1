import pytest

from docx2ir.convert.anchor import AnchorResolver
from docx2ir.convert.context import ConversionContext, ReaderOptions
from docx2ir.convert.revision import RevisionPolicy


@pytest.fixture
def context():
    return ConversionContext(ReaderOptions())


@pytest.fixture
def make_context():
    def _make(track_changes="accept", media_store=None):
        return ConversionContext(ReaderOptions(track_changes=track_changes), media_store)
    return _make


@pytest.fixture
def anchors(context):
    return AnchorResolver(context)


@pytest.fixture
def make_policy(make_context):
    def _make(track_changes):
        return RevisionPolicy(make_context(track_changes))
    return _make
