"""Mapping quality summary for a BAM file, written as a Picard style report.

Picard has no mapping quality summary, so this produces one in the same
layout (`## METRICS CLASS` marker, header, single data line) that the
collation step reads for every other family.
"""
import pysam

from picardqc.distributed.transaction import file_transaction
from picardqc.utils import file_exists

# upper bounds of mapping quality bins, inclusive
MAPQ_BINS = ((0, "MAPQ_0"), (9, "MAPQ_1_9"), (19, "MAPQ_10_19"), (29, "MAPQ_20_29"),
             (39, "MAPQ_30_39"), (59, "MAPQ_40_59"), (255, "MAPQ_60_PLUS"))

HEADER = ["TOTAL_READS", "MAPPED_READS", "MEAN_MAPQ"] + [name for _, name in MAPQ_BINS]

def _bin_name(mapq):
    for upper, name in MAPQ_BINS:
        if mapq <= upper:
            return name
    return MAPQ_BINS[-1][1]

def count_mapq(reads):
    """Count primary reads by mapping quality bin.
    """
    counts = dict((name, 0) for _, name in MAPQ_BINS)
    total, mapped, mapq_sum = 0, 0, 0
    for read in reads:
        if read.is_secondary or read.is_supplementary:
            continue
        total += 1
        if read.is_unmapped:
            continue
        mapped += 1
        mapq_sum += read.mapping_quality
        counts[_bin_name(read.mapping_quality)] += 1
    mean = "%.2f" % (float(mapq_sum) / mapped) if mapped else "0"
    return [str(total), str(mapped), mean] + [str(counts[name]) for _, name in MAPQ_BINS]

def mapq_metrics(bam_file, out_file, config=None):
    if not file_exists(out_file):
        with pysam.AlignmentFile(bam_file, "rb", check_sq=False) as bam_handle:
            vals = count_mapq(bam_handle.fetch(until_eof=True))
        with file_transaction(config or {}, out_file) as tx_out_file:
            with open(tx_out_file, "w") as out_handle:
                out_handle.write("## htsjdk.samtools.metrics.StringHeader\n")
                out_handle.write("# picardqc mapq INPUT=%s\n\n" % bam_file)
                out_handle.write("## METRICS CLASS\tpicardqc.MappingQualityMetrics\n")
                out_handle.write("\t".join(HEADER) + "\n")
                out_handle.write("\t".join(vals) + "\n\n")
    return out_file
