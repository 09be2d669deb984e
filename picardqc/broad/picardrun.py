"""Convenience functions for running Picard metrics collection tools.

Each function skips work when its metrics file already exists and writes
through a file transaction, so interrupted runs restart cleanly. Charts,
histograms and BAM outputs Picard insists on producing go to a temporary
directory and are discarded.
"""
import os

from picardqc.utils import file_exists
from picardqc.distributed.transaction import file_transaction, tx_tmpdir


def tx_config(picard):
    tmp_dir = picard.toolchain.tmp_dir
    return {"resources": {"tmp": {"dir": tmp_dir}}} if tmp_dir else {}

def picard_alignment_metrics(picard, align_bam, ref_file, out_file):
    """Collect alignment summary metrics, one row per read category."""
    if not file_exists(out_file):
        with tx_tmpdir(tx_config(picard)) as tmp_dir:
            with file_transaction(tx_config(picard), out_file) as tx_out_file:
                opts = [("INPUT", align_bam),
                        ("OUTPUT", tx_out_file),
                        ("REFERENCE_SEQUENCE", ref_file),
                        ("TMP_DIR", tmp_dir)]
                picard.run("CollectAlignmentSummaryMetrics", opts, tmp_dir)
    return out_file

def picard_duplication_metrics(picard, align_bam, out_file):
    """Mark duplicates only to retrieve duplication metrics.
    """
    if not file_exists(out_file):
        with tx_tmpdir(tx_config(picard)) as tmp_dir:
            with file_transaction(tx_config(picard), out_file) as tx_out_file:
                opts = [("INPUT", align_bam),
                        ("OUTPUT", os.path.join(tmp_dir, "dup.bam")),
                        ("METRICS_FILE", tx_out_file),
                        ("PROGRAM_RECORD_ID", "null"),
                        ("TMP_DIR", tmp_dir)]
                picard.run("MarkDuplicates", opts, tmp_dir)
    return out_file

def picard_gc_bias_metrics(picard, align_bam, ref_file, out_file):
    if not file_exists(out_file):
        with tx_tmpdir(tx_config(picard)) as tmp_dir:
            with file_transaction(tx_config(picard), out_file) as tx_out_file:
                opts = [("INPUT", align_bam),
                        ("OUTPUT", os.path.join(tmp_dir, "gc_bias.detail_metrics")),
                        ("SUMMARY_OUTPUT", tx_out_file),
                        ("CHART_OUTPUT", os.path.join(tmp_dir, "gc_bias.pdf")),
                        ("REFERENCE_SEQUENCE", ref_file),
                        ("TMP_DIR", tmp_dir)]
                picard.run("CollectGcBiasMetrics", opts, tmp_dir)
    return out_file

def picard_insert_metrics(picard, align_bam, out_file):
    """ Collect insert size metrics for a bam file """
    if not file_exists(out_file):
        with tx_tmpdir(tx_config(picard)) as tmp_dir:
            with file_transaction(tx_config(picard), out_file) as tx_out_file:
                opts = [("INPUT", align_bam),
                        ("OUTPUT", tx_out_file),
                        ("HISTOGRAM_FILE", os.path.join(tmp_dir, "insert-histogram.pdf")),
                        ("TMP_DIR", tmp_dir)]
                picard.run("CollectInsertSizeMetrics", opts, tmp_dir)
    return out_file

def picard_library_complexity(picard, align_bam, out_file):
    if not file_exists(out_file):
        with tx_tmpdir(tx_config(picard)) as tmp_dir:
            with file_transaction(tx_config(picard), out_file) as tx_out_file:
                opts = [("INPUT", align_bam),
                        ("OUTPUT", tx_out_file),
                        ("TMP_DIR", tmp_dir)]
                picard.run("EstimateLibraryComplexity", opts, tmp_dir)
    return out_file

def picard_rnaseq_metrics(picard, align_bam, ref_flat, out_file, ribo="null"):
    """ Collect RNASeq metrics for a bam file """
    if not file_exists(out_file):
        with tx_tmpdir(tx_config(picard)) as tmp_dir:
            with file_transaction(tx_config(picard), out_file) as tx_out_file:
                opts = [("INPUT", align_bam),
                        ("OUTPUT", tx_out_file),
                        ("TMP_DIR", tmp_dir),
                        ("REF_FLAT", ref_flat),
                        ("STRAND_SPECIFICITY", "NONE"),
                        ("ASSUME_SORTED", "True"),
                        ("RIBOSOMAL_INTERVALS", ribo or "null")]
                picard.run("CollectRnaSeqMetrics", opts, tmp_dir)
    return out_file

def picard_quality_distribution(picard, align_bam, out_file):
    """Histogram of base quality scores.
    """
    if not file_exists(out_file):
        with tx_tmpdir(tx_config(picard)) as tmp_dir:
            with file_transaction(tx_config(picard), out_file) as tx_out_file:
                opts = [("INPUT", align_bam),
                        ("OUTPUT", tx_out_file),
                        ("CHART_OUTPUT", os.path.join(tmp_dir, "quality.pdf")),
                        ("TMP_DIR", tmp_dir)]
                picard.run("QualityScoreDistribution", opts, tmp_dir)
    return out_file
