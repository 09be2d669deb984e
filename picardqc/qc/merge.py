"""Join collated family tables into a single master metrics table.

The alignment summary table defines the samples and their order. Every other
family is left merged on SAMPLE, but only after checking it covers exactly
the same samples in the same order, since a mismatch means the reports in
the directory do not describe a consistent set of samples.
"""
import csv

import pandas as pd

from picardqc import utils
from picardqc.distributed.transaction import file_transaction
from picardqc.log import logger
from picardqc.qc import CollationError
from picardqc.qc.collate import SAMPLE_COLUMN
from picardqc.qc.families import PRIMARY, get_family


class MissingPrimaryTable(CollationError):
    pass

class SampleMisalignment(CollationError):
    pass


def master_file(prefix):
    return "%s-all-metrics.tsv" % prefix

def read_table(fname):
    """Read a family table keeping every value as the original text.
    """
    return pd.read_csv(fname, sep="\t", dtype=str, keep_default_na=False, na_filter=False,
                       quoting=csv.QUOTE_NONE)

def write_master(df, out_file):
    with file_transaction(out_file) as tx_out_file:
        df.to_csv(tx_out_file, sep="\t", index=False, quoting=csv.QUOTE_NONE)
    return out_file

def filter_primary(df, family):
    """Remove per-read rows of paired end data, leaving one row per sample.
    """
    if family.exclude is None:
        return df
    if family.exclude.column not in df.columns:
        logger.warning("No %s column in %s metrics, not filtering rows" %
                       (family.exclude.column, family.name))
        return df
    keep = ~df[family.exclude.column].isin(family.exclude.values)
    return df[keep].reset_index(drop=True)

def _check_samples(master, incoming, family):
    want = list(master[SAMPLE_COLUMN])
    got = list(incoming[SAMPLE_COLUMN])
    if want != got:
        missing = [x for x in want if x not in set(got)]
        extra = [x for x in got if x not in set(want)]
        raise SampleMisalignment("Samples in %s metrics do not match alignment metrics. "
                                 "Missing: %s. Unexpected: %s. Expected order: %s. Found: %s"
                                 % (family.name, ", ".join(missing) or "none",
                                    ", ".join(extra) or "none", ", ".join(want), ", ".join(got)))

def _rename_collisions(master, incoming, family):
    renames = {}
    for col in incoming.columns:
        if col != SAMPLE_COLUMN and col in master.columns:
            renames[col] = "%s_%s" % (col, family.name)
    if renames:
        logger.debug("Renaming %s metrics columns: %s" %
                     (family.name, ", ".join("%s -> %s" % (k, v) for k, v in renames.items())))
    return incoming.rename(columns=renames)

def merge_family(master, incoming, family):
    """Left merge one family table into the master table on SAMPLE.
    """
    _check_samples(master, incoming, family)
    incoming = _rename_collisions(master, incoming, family)
    return pd.merge(master, incoming, on=SAMPLE_COLUMN, how="left", sort=False)

def cleanup(fnames):
    """Remove intermediate family tables, ignoring any already gone.
    """
    for fname in fnames:
        utils.remove_safe(fname)

def join_tables(prefix, table_files, families):
    """Join family tables into `<prefix>-all-metrics.tsv`.

    table_files maps family names to collated tables; families lists the
    family registry in merge order. Consumed family tables are removed once
    the master table is written, including tables of families not joined
    into it.
    """
    primary = get_family(PRIMARY, families)
    if primary.name not in table_files:
        raise MissingPrimaryTable("No %s metrics (*%s) available, cannot create a master metrics table "
                                  "for %s" % (primary.name, primary.suffix, prefix))
    master = filter_primary(read_table(table_files[primary.name]), primary)
    dups = sorted(set(master[SAMPLE_COLUMN][master[SAMPLE_COLUMN].duplicated()]))
    if dups:
        raise SampleMisalignment("Multiple %s metrics rows for samples: %s" % (primary.name, ", ".join(dups)))
    consumed = [table_files[primary.name]]
    for family in families:
        if family.name == primary.name:
            continue
        if not family.joined:
            if family.name in table_files:
                consumed.append(table_files[family.name])
            continue
        if family.name not in table_files:
            if not family.optional:
                raise CollationError("Missing required %s metrics (*%s)" % (family.name, family.suffix))
            continue
        master = merge_family(master, read_table(table_files[family.name]), family)
        consumed.append(table_files[family.name])
        logger.debug("Merged %s metrics into master table" % family.name)
    out_file = write_master(master, master_file(prefix))
    cleanup(consumed)
    logger.info("Wrote metrics for %s samples to %s" % (len(master), out_file))
    return out_file
