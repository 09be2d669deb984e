"""Parse sections out of Picard style text metrics reports.

A report is a series of sections, each introduced by a marker line starting
with `##`, followed by a tab-delimited header line and data lines:

    ## htsjdk.samtools.metrics.StringHeader
    # CollectAlignmentSummaryMetrics INPUT=s1.bam ...

    ## METRICS CLASS	picard.analysis.AlignmentSummaryMetrics
    CATEGORY	TOTAL_READS	PF_READS ...
    FIRST_OF_PAIR	1000	1000 ...
    PAIR	2000	2000 ...

    ## HISTOGRAM	java.lang.Integer
    QUALITY	COUNT_OF_Q
    2	1041

Values are never interpreted, only split and joined on tabs.
"""
import collections

SUMMARY = "SUMMARY"
HISTOGRAM = "HISTOGRAM"
MODES = (SUMMARY, HISTOGRAM)

MARKER_PREFIX = "##"

Section = collections.namedtuple("Section", ["kind", "header", "rows"])

# raw tokenized section: marker line, split header and unsplit lines following it
Record = collections.namedtuple("Record", ["marker", "header", "lines"])


class SectionNotFound(ValueError):
    pass


def split_line(line):
    """Split a tab-delimited line, keeping empty trailing fields.
    """
    return tuple(line.rstrip("\r\n").split("\t"))

def is_marker(line):
    return line.startswith(MARKER_PREFIX)

def parse_sections(lines):
    """Tokenize report lines into marker, header and following line records.

    The header is the line directly after a marker. Records run up to the
    next marker line or the end of input.
    """
    marker, header, cur_lines = None, None, []
    want_header = False
    for line in lines:
        line = line.rstrip("\r\n")
        if is_marker(line):
            if marker is not None:
                yield Record(marker, header, cur_lines)
            marker, header, cur_lines = line, None, []
            want_header = True
        elif want_header:
            header = split_line(line) if line.strip() else None
            want_header = False
        elif marker is not None:
            cur_lines.append(line)
    if marker is not None:
        yield Record(marker, header, cur_lines)

def fit_row(fields, width):
    """Normalize a data row to the width of its header.

    Some tools trim trailing empty columns, so pad short rows.
    """
    if len(fields) < width:
        return fields + ("",) * (width - len(fields))
    return fields[:width]

def to_section(record, mode):
    if mode not in MODES:
        raise ValueError("Unexpected section mode %s, need one of %s" % (mode, MODES))
    if mode == SUMMARY:
        data = record.lines[:1]
    else:
        data = record.lines
    rows = tuple(fit_row(split_line(l), len(record.header)) for l in data if l.strip())
    return Section(mode, record.header, rows)

def extract_section(lines, marker, mode):
    """Retrieve the first section introduced by `marker` from report lines.

    SUMMARY sections provide the single line below the header; HISTOGRAM
    sections provide all non-blank lines until the next marker.
    """
    for record in parse_sections(lines):
        if record.marker.startswith(marker):
            if record.header is None:
                raise SectionNotFound("Section %s has no header line" % marker)
            return to_section(record, mode)
    raise SectionNotFound("Did not find section %s" % marker)

def read_section(fname, marker, mode):
    with open(fname) as in_handle:
        try:
            return extract_section(in_handle, marker, mode)
        except SectionNotFound as e:
            raise SectionNotFound("%s: %s" % (fname, e))
