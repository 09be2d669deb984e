"""Run the Picard metrics toolchain over one BAM file.

Report files are named `<sample><family suffix>` in the output directory so
the collation step tags every family's report with the same sample name.
"""
import collections
import os

from picardqc import bam, broad, utils
from picardqc.broad import picardrun
from picardqc.log import logger
from picardqc.qc import families, mapq


def _out_file(out_dir, sample, name):
    return os.path.join(out_dir, "%s%s" % (sample, families.get_family(name).suffix))

def get_sample(bam_file, sample=None):
    """Sample name for a BAM file: given, from read groups or from the file name.
    """
    if sample:
        return sample
    return bam.sample_name(bam_file) or utils.splitext_plus(os.path.basename(bam_file))[0]

def run(bam_file, toolchain, out_dir, sample=None):
    """Produce every family's report for a BAM file, returning family names to report files.
    """
    bam_file = os.path.abspath(bam_file)
    sample = get_sample(bam_file, sample)
    utils.safe_makedir(out_dir)
    runner = broad.PicardCmdRunner(toolchain)
    out = collections.OrderedDict()
    logger.info("Collecting Picard metrics for %s from %s" % (sample, bam_file))
    out["alignment"] = runner.run_fn("picard_alignment_metrics", bam_file, toolchain.ref_file,
                                     _out_file(out_dir, sample, "alignment"))
    if toolchain.refflat:
        out["rnaseq"] = runner.run_fn("picard_rnaseq_metrics", bam_file, toolchain.refflat,
                                      _out_file(out_dir, sample, "rnaseq"),
                                      toolchain.ribosomal_intervals)
    else:
        logger.info("No refFlat annotation provided, skipping RNA-seq metrics for %s" % sample)
    out["duplication"] = runner.run_fn("picard_duplication_metrics", bam_file,
                                       _out_file(out_dir, sample, "duplication"))
    out["gcbias"] = runner.run_fn("picard_gc_bias_metrics", bam_file, toolchain.ref_file,
                                  _out_file(out_dir, sample, "gcbias"))
    if bam.is_paired(bam_file):
        out["insertsize"] = runner.run_fn("picard_insert_metrics", bam_file,
                                          _out_file(out_dir, sample, "insertsize"))
    else:
        logger.info("Single end reads, skipping insert size metrics for %s" % sample)
    out["libcomplexity"] = runner.run_fn("picard_library_complexity", bam_file,
                                         _out_file(out_dir, sample, "libcomplexity"))
    out["mapq"] = mapq.mapq_metrics(bam_file, _out_file(out_dir, sample, "mapq"),
                                    picardrun.tx_config(runner))
    out["qualityscore"] = runner.run_fn("picard_quality_distribution", bam_file,
                                        _out_file(out_dir, sample, "qualityscore"))
    return out
