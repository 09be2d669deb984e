#!/usr/bin/env python -Es
"""Run Picard quality control metrics and collate them across samples.

Usage:
  picardqc_run.py collate <prefix> <directory>
      Collate Picard metrics reports found in <directory> into
      <prefix>-all-metrics.tsv, with one row per sample.
  picardqc_run.py metrics <bam_file> <out_dir> -r <ref.fa> [--refflat <refFlat>]
      Run Picard metrics collection over a BAM file.
  picardqc_run.py refflat <gtf_file>
      Convert GTF annotations into a Picard refFlat file.
"""
import sys

from picardqc.pipeline.main import main

if __name__ == "__main__":
    main(sys.argv[1:])
