"""
Property-based tests for the aggregate search-results document.
"""

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from root_rdap.aggregate import TRIMMED_KEYS, AggregateCollector


@st.composite
def rdap_document_strategy(draw):
    """Generate a minimal RDAP domain document."""
    tld = draw(st.text(alphabet=string.ascii_lowercase, min_size=2, max_size=10))
    note = draw(st.text(alphabet=string.ascii_letters, min_size=1, max_size=20))
    return {
        "objectClassName": "domain",
        "rdapConformance": ["rdap_level_0"],
        "ldhName": tld,
        "handle": tld,
        "notices": [{"title": "About This Service", "description": [note]}],
        "links": [],
    }


class TestAggregateOrderProperty:
    """Results keep the order documents were added in."""

    @given(documents=st.lists(rdap_document_strategy(), max_size=20))
    @settings(max_examples=100)
    def test_results_in_order(self, documents: list[dict]) -> None:
        collector = AggregateCollector()
        for document in documents:
            collector.add(document)

        aggregate = collector.document()

        assert len(collector) == len(documents)
        assert [r["ldhName"] for r in aggregate["domainSearchResults"]] == [
            d["ldhName"] for d in documents
        ]


class TestAggregateTrimmingProperty:
    """Per-result notices and conformance are dropped."""

    @given(documents=st.lists(rdap_document_strategy(), min_size=1, max_size=10))
    @settings(max_examples=100)
    def test_trimmed_keys_removed(self, documents: list[dict]) -> None:
        collector = AggregateCollector()
        for document in documents:
            collector.add(document)

        for result in collector.document()["domainSearchResults"]:
            for key in TRIMMED_KEYS:
                assert key not in result
            assert result["objectClassName"] == "domain"

    @given(documents=st.lists(rdap_document_strategy(), min_size=1, max_size=10))
    @settings(max_examples=100)
    def test_first_notices_win(self, documents: list[dict]) -> None:
        collector = AggregateCollector()
        for document in documents:
            collector.add(document)

        aggregate = collector.document()

        assert aggregate["notices"] == documents[0]["notices"]
        assert aggregate["rdapConformance"] == ["rdap_level_0"]

    def test_input_documents_not_modified(self) -> None:
        document = {
            "ldhName": "example",
            "rdapConformance": ["rdap_level_0"],
            "notices": [{"title": "About This Service", "description": []}],
        }
        collector = AggregateCollector()
        collector.add(document)

        assert "notices" in document
        assert "rdapConformance" in document

    def test_empty_aggregate(self) -> None:
        aggregate = AggregateCollector().document()

        assert aggregate == {
            "rdapConformance": ["rdap_level_0"],
            "notices": [],
            "domainSearchResults": [],
        }
