import pytest

from picardqc.qc import sections
from picardqc.qc.sections import SUMMARY, HISTOGRAM, SectionNotFound
from tests.unit import data

METRICS = "## METRICS CLASS"


def _lines(text):
    return text.splitlines(True)


def test_parse_sections_tokenizes_markers():
    records = list(sections.parse_sections(_lines(data.duplication_metrics("s1"))))
    markers = [r.marker.split("\t")[0] for r in records]
    assert markers == ["## htsjdk.samtools.metrics.StringHeader",
                       "## htsjdk.samtools.metrics.StringHeader",
                       "## METRICS CLASS", "## HISTOGRAM"]
    assert records[2].header[:2] == ("LIBRARY", "UNPAIRED_READS_EXAMINED")
    assert records[3].header == ("BIN", "VALUE")


def test_parse_sections_ignores_lines_before_first_marker():
    records = list(sections.parse_sections(["stray\tline\n", "## METRICS CLASS\n", "A\tB\n", "1\t2\n"]))
    assert len(records) == 1
    assert records[0].header == ("A", "B")
    assert records[0].lines == ["1\t2"]


def test_summary_takes_line_under_header():
    section = sections.extract_section(_lines(data.duplication_metrics("s1")), METRICS, SUMMARY)
    assert section.kind == SUMMARY
    assert section.header == ("LIBRARY", "UNPAIRED_READS_EXAMINED", "READ_PAIRS_EXAMINED",
                              "PERCENT_DUPLICATION", "ESTIMATED_LIBRARY_SIZE")
    assert section.rows == (("lib1", "0", "500", "0.1", "5000"),)


def test_histogram_rows_stop_at_next_marker():
    section = sections.extract_section(_lines(data.rnaseq_metrics("s1")), METRICS, HISTOGRAM)
    assert section.rows == (("2000", "1500", "0.8", "", "", ""),)


def test_histogram_collects_all_rows():
    section = sections.extract_section(_lines(data.alignment_metrics("s1")), METRICS, HISTOGRAM)
    assert [r[0] for r in section.rows] == ["FIRST_OF_PAIR", "SECOND_OF_PAIR", "PAIR"]


def test_histogram_marker():
    section = sections.extract_section(_lines(data.quality_distribution("s1")),
                                       "## HISTOGRAM", HISTOGRAM)
    assert section.header == ("QUALITY", "COUNT_OF_Q")
    assert section.rows == (("2", "10"), ("20", "90"), ("30", "900"))


def test_histogram_skips_blank_lines_inside_section():
    lines = ["## HISTOGRAM\tx\n", "BIN\tVALUE\n", "1\t2\n", "\n", "3\t4\n"]
    section = sections.extract_section(lines, "## HISTOGRAM", HISTOGRAM)
    assert section.rows == (("1", "2"), ("3", "4"))


def test_trailing_empty_fields_are_kept():
    section = sections.extract_section(_lines(data.alignment_metrics("s1", paired=False)),
                                       METRICS, HISTOGRAM)
    assert len(section.header) == len(data.ALIGN_HEADER)
    assert section.rows[0][-3:] == ("", "", "")


def test_short_rows_padded_to_header():
    lines = ["## METRICS CLASS\n", "A\tB\tC\n", "1\n"]
    section = sections.extract_section(lines, METRICS, SUMMARY)
    assert section.rows == (("1", "", ""),)


def test_values_pass_through_as_text():
    lines = ["## METRICS CLASS\r\n", "A\tB\tC\r\n", "?\t1,5\tNA\r\n"]
    section = sections.extract_section(lines, METRICS, SUMMARY)
    assert section.header == ("A", "B", "C")
    assert section.rows == (("?", "1,5", "NA"),)


def test_summary_without_data_line():
    section = sections.extract_section(["## METRICS CLASS\n", "A\tB\n", "\n"], METRICS, SUMMARY)
    assert section.rows == ()


def test_missing_marker_raises():
    with pytest.raises(SectionNotFound):
        sections.extract_section(_lines(data.quality_distribution("s1")), METRICS, SUMMARY)


def test_marker_without_header_raises():
    with pytest.raises(SectionNotFound):
        sections.extract_section(["## METRICS CLASS\n"], METRICS, SUMMARY)


def test_unknown_mode():
    with pytest.raises(ValueError):
        sections.extract_section(_lines(data.mapq_metrics("s1")), METRICS, "TABLE")


def test_read_section_reports_file(tmpdir):
    fname = data.write_report(tmpdir, "s1", "qualityscore")
    with pytest.raises(SectionNotFound) as excinfo:
        sections.read_section(fname, METRICS, SUMMARY)
    assert fname in str(excinfo.value)
