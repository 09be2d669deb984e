"""Main entry point for collating Picard metrics and running the toolchain.

Handles the `collate`, `metrics`, `refflat` and `version` sub-commands.
"""
import argparse
import os
import sys

from picardqc import log
from picardqc.log import logger
from picardqc.pipeline import config_utils, version
from picardqc.qc import CollationError, collate, merge
from picardqc.qc import picard as picard_qc
from picardqc.rnaseq import refflat

def run_collate(config):
    """Collate all metric family reports in a directory into a master table.

    Returns the master table file. Raises CollationError subclasses when the
    reports cannot be joined into a correct table.
    """
    logger.info("Collating Picard metrics from %s into %s" % (config.directory, config.prefix))
    table_files = collate.collate_all(config.prefix, config.directory, config.families)
    return merge.join_tables(config.prefix, table_files, config.families)

def _load_system_config(config_file):
    return config_utils.load_config(config_file) if config_file else {}

def run_main(args, config_file=None, **kwargs):
    """Run a sub-command, exiting with a non-zero status on fatal collation errors.
    """
    config = _load_system_config(config_file)
    handler = log.setup_local_logging(config)
    try:
        if kwargs.get("collate"):
            run_collate(config_utils.collate_config(args.prefix, os.path.abspath(args.directory), config))
        elif kwargs.get("metrics"):
            toolchain = config_utils.toolchain_config(config, os.path.abspath(args.ref_file),
                                                      _abspath_or_none(args.refflat),
                                                      _abspath_or_none(args.ribosomal_intervals))
            picard_qc.run(args.bam_file, toolchain, os.path.abspath(args.out_dir), args.sample)
        elif kwargs.get("refflat"):
            refflat.gtf_to_refflat(os.path.abspath(args.gtf_file), args.out_file, config)
        elif kwargs.get("version"):
            print(version.__version__)
    except CollationError as e:
        logger.error(str(e))
        sys.exit(1)
    finally:
        handler.pop_application()
        handler.close()

def _abspath_or_none(fname):
    return os.path.abspath(fname) if fname else None

# ## Command line

def add_collate_subparser(subparsers):
    parser = subparsers.add_parser("collate", help="Collate Picard metrics reports into a single table")
    parser.add_argument("prefix", help="Output prefix: writes <prefix>-all-metrics.tsv")
    parser.add_argument("directory", help="Directory containing Picard metrics reports")
    return parser

def add_metrics_subparser(subparsers):
    parser = subparsers.add_parser("metrics", help="Run Picard metrics collection over a BAM file")
    parser.add_argument("bam_file", help="Coordinate sorted BAM file")
    parser.add_argument("out_dir", help="Directory to write metrics reports to")
    parser.add_argument("-r", "--ref", dest="ref_file", required=True,
                        help="Reference genome FASTA file")
    parser.add_argument("--refflat", help="refFlat gene annotations, enables RNA-seq metrics")
    parser.add_argument("--ribosomal-intervals", help="Picard interval list of ribosomal RNA")
    parser.add_argument("--sample", help="Sample name (defaults to BAM read group or file name)")
    parser.add_argument("-c", "--config", dest="config_file",
                        help="YAML system configuration with program resources")
    return parser

def add_refflat_subparser(subparsers):
    parser = subparsers.add_parser("refflat", help="Convert GTF annotations to Picard refFlat")
    parser.add_argument("gtf_file", help="GTF gene annotations")
    parser.add_argument("-o", "--out", dest="out_file", help="Output refFlat file")
    parser.add_argument("-c", "--config", dest="config_file",
                        help="YAML system configuration with program resources")
    return parser

def add_version_subparser(subparsers):
    return subparsers.add_parser("version", help="Print current version")

def parse_cl_args(in_args):
    """Parse input commandline arguments into keyword arguments for run_main.
    """
    sub_cmds = {"collate": add_collate_subparser,
                "metrics": add_metrics_subparser,
                "refflat": add_refflat_subparser,
                "version": add_version_subparser}
    description = "Run Picard quality control metrics and collate them across samples."
    parser = argparse.ArgumentParser(description=description)
    subparsers = parser.add_subparsers(dest="sub_cmd", help="picardqc commands")
    subparsers.required = True
    for add_fn in sub_cmds.values():
        add_fn(subparsers)
    args = parser.parse_args(in_args)
    return {"args": args,
            "config_file": getattr(args, "config_file", None),
            args.sub_cmd: True}

def main(in_args=None):
    if in_args is None:
        in_args = sys.argv[1:]
    run_main(**parse_cl_args(in_args))
