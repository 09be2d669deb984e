"""Find metric family report files and name the samples they belong to.
"""
import collections
import os

from picardqc import utils

ReportFile = collections.namedtuple("ReportFile", ["path", "family", "sample"])

def find_reports(directory, suffix):
    """Find all report files ending in `suffix` in and below a directory.

    Paths come back in lexicographic order so repeated runs over the same
    directory produce identical tables.
    """
    for fname in sorted(utils.locate("*%s" % suffix, directory)):
        yield fname

def sample_name(fname, suffix):
    """Sample identifier for a report: the file name up to its family suffix.

    With chained suffixes (s1.rna_metrics.insert_size_metrics) only the
    last occurrence of the suffix is removed.
    """
    base = os.path.basename(fname)
    idx = base.rfind(suffix)
    if idx < 0:
        raise ValueError("Report file %s does not end with %s" % (fname, suffix))
    return base[:idx]

def discover(directory, family):
    for fname in find_reports(directory, family.suffix):
        yield ReportFile(fname, family.name, sample_name(fname, family.suffix))
