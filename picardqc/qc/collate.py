"""Collate a metric family's per-sample reports into one table.

Each family table has a SAMPLE column followed by the columns of the family's
report section, with one or more rows per report file.
"""
import collections
import os

from picardqc import utils
from picardqc.distributed.transaction import file_transaction
from picardqc.log import logger
from picardqc.qc import reports
from picardqc.qc.families import ACCUMULATION_COLUMNS
from picardqc.qc.sections import SectionNotFound, read_section, fit_row

SAMPLE_COLUMN = "SAMPLE"

FamilyTable = collections.namedtuple("FamilyTable", ["family", "header", "rows"])

def table_file(prefix, family):
    return "%s-%s.tsv" % (prefix, family.name)

def _select_columns(header, family):
    """Indexes of section columns copied into the family table.
    """
    limit = min(family.columns or len(header), len(header))
    return [i for i in range(limit) if header[i] not in ACCUMULATION_COLUMNS]

def collate_family(family, directory):
    """Build the table for one metric family from all reports in a directory.

    Returns None when the family has no reports. The header comes from the
    first report with the section; later reports are not required to match
    it and are only flagged when they differ.
    """
    header, keep, rows = None, None, []
    found = False
    for report in reports.discover(directory, family):
        found = True
        try:
            section = read_section(report.path, family.marker, family.mode)
        except SectionNotFound as e:
            logger.warning("Skipping %s metrics for sample %s. %s" % (family.name, report.sample, e))
            continue
        if header is None:
            header = section.header
            keep = _select_columns(header, family)
        elif section.header != header:
            logger.warning("Header in %s differs from the first %s report: %s columns, expected %s. "
                           "Reading rows against the first report header" %
                           (report.path, family.name, len(section.header), len(header)))
        if not section.rows:
            logger.warning("No %s metrics rows in %s" % (family.name, report.path))
        for row in section.rows:
            row = fit_row(row, len(header))
            rows.append((report.sample,) + tuple(row[i] for i in keep))
    if not found:
        logger.info("No %s metrics (*%s) found in %s" % (family.name, family.suffix, directory))
        return None
    if header is None:
        logger.info("No %s metrics sections found in %s" % (family.name, directory))
        return None
    return FamilyTable(family.name, (SAMPLE_COLUMN,) + tuple(header[i] for i in keep), tuple(rows))

def write_table(table, out_file):
    """Write a family table as tab-delimited text with a single header line.
    """
    with file_transaction(out_file) as tx_out_file:
        with open(tx_out_file, "w") as out_handle:
            out_handle.write("\t".join(table.header) + "\n")
            for row in table.rows:
                out_handle.write("\t".join(row) + "\n")
    return out_file

def collate_all(prefix, directory, families):
    """Write a table for every family present in a directory.

    Returns family names mapped to the written tables, in family order.
    """
    utils.safe_makedir(os.path.dirname(os.path.abspath(prefix)))
    out = collections.OrderedDict()
    for family in families:
        table = collate_family(family, directory)
        if table is not None:
            out_file = write_table(table, table_file(prefix, family))
            logger.info("Collated %s rows of %s metrics into %s" % (len(table.rows), family.name, out_file))
            out[family.name] = out_file
    return out
