"""Functionality to query BAM files.
"""
import pysam

def is_paired(bam_file, check_reads=300000):
    """Determine if a BAM file has paired reads, checking the first reads only.
    """
    with pysam.AlignmentFile(bam_file, "rb", check_sq=False) as bam_handle:
        for i, read in enumerate(bam_handle.fetch(until_eof=True)):
            if read.is_paired:
                return True
            if i + 1 >= check_reads:
                break
    return False

def sample_name(bam_file):
    """Sample name from read group SM tags, falling back to None.
    """
    with pysam.AlignmentFile(bam_file, "rb", check_sq=False) as bam_handle:
        samples = sorted(set(rg["SM"] for rg in bam_handle.header.to_dict().get("RG", []) if "SM" in rg))
    if len(samples) == 1:
        return samples[0]
