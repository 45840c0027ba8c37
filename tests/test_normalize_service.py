import pytest

from autobib.core.models import DblpHit, Publication, ScholarResult
from autobib.parsing.dblp_xml import parse_dblp_xml
from autobib.services.citation_service import CitationSynthesizer
from autobib.services.normalize_service import RecordNormalizer


def _hit(**overrides) -> DblpHit:
    values = dict(title="A Title", authors=["Ada Lovelace"], year="1843")
    values.update(overrides)
    return DblpHit(**values)


def test_normalize_vaswani_hit_strips_suffix_and_builds_key():
    hit = DblpHit(
        title="Attention Is All You Need",
        authors=["Ashish Vaswani 83", "Noam Shazeer"],
        year="2017",
        venue="NeurIPS",
    )

    (publication,) = RecordNormalizer().normalize([hit])

    assert publication.authors == ["Ashish Vaswani", "Noam Shazeer"]
    assert publication.venue == "NeurIPS"
    assert CitationSynthesizer().synthesize(publication).startswith("@inproceedings{vaswani2017,")


def test_normalize_trims_scholar_fields():
    result = ScholarResult(
        title=" Some Paper ",
        authors=["J. Smith", " A. Lee"],
        venue=" ICML ",
        year="2020",
        citations_href="/scholar?oi=bibs&hl=en&cites=1",
    )

    (publication,) = RecordNormalizer().normalize([result])

    assert publication == Publication(
        title="Some Paper",
        authors=["J. Smith", "A. Lee"],
        year="2020",
        venue="ICML",
        doi="/scholar?oi=bibs&hl=en&cites=1",
    )


def test_normalize_drops_exactly_the_defective_records():
    records = [
        _hit(),
        _hit(title="   "),
        _hit(authors=[]),
        _hit(authors=["  ", ""]),
        _hit(year="17"),
        _hit(year=""),
        _hit(title="Another Title", year="2001"),
    ]

    publications = RecordNormalizer().normalize(records)

    assert len(publications) == len(records) - 5
    assert [publication.title for publication in publications] == ["A Title", "Another Title"]


def test_normalize_preserves_author_order():
    hit = _hit(authors=["Zed Last 0002", "Amy First", "Mo Middle 0001"])

    (publication,) = RecordNormalizer().normalize([hit])

    assert publication.authors == ["Zed Last", "Amy First", "Mo Middle"]


def test_normalize_leaves_missing_type_empty():
    (publication,) = RecordNormalizer().normalize([_hit()])

    assert publication.type == ""


def test_normalize_fixture_round_trip(dblp_xml: str):
    publications = RecordNormalizer().normalize(parse_dblp_xml(dblp_xml))

    assert len(publications) == 3
    assert publications[0].authors[0] == "Ashish Vaswani"


def test_normalize_rejects_unknown_record_types():
    with pytest.raises(TypeError):
        RecordNormalizer().normalize([{"title": "dict records are not supported"}])
