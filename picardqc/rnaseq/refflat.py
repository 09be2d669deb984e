"""Prepare gene annotations in the refFlat format used by CollectRnaSeqMetrics.
"""
import os

from picardqc import utils
from picardqc.distributed.transaction import file_transaction
from picardqc.log import logger
from picardqc.pipeline import config_utils
from picardqc.provenance import do

def gtf_to_refflat(gtf_file, out_file=None, config=None):
    """
    makes a refFlat file for use with Picard from a GTF file

    gtfToGenePred writes genePred lines; refFlat is the same with the gene
    name prepended, which we take from the transcript name column.
    """
    if config is None: config = {}
    if out_file is None:
        out_file = utils.splitext_plus(gtf_file)[0] + ".refFlat"
    if utils.file_exists(out_file):
        logger.info("%s already exists, skipping refFlat creation." % out_file)
        return out_file
    gtf_to_genepred = config_utils.get_program("gtfToGenePred", config)
    logger.info("Making %s into a refFlat file named %s." % (gtf_file, out_file))
    with file_transaction(config, out_file) as tx_out_file:
        genepred = "%s.genepred" % tx_out_file
        do.run([gtf_to_genepred, "-genePredExt", "-geneNameAsName2", gtf_file, genepred],
               "Convert GTF to genePred", checks=[do.file_nonempty(genepred)])
        with open(genepred) as in_handle, open(tx_out_file, "w") as out_handle:
            for line in in_handle:
                parts = genepred_to_refflat(line.rstrip("\r\n").split("\t"))
                out_handle.write("\t".join(parts) + "\n")
        os.remove(genepred)
    return out_file

def genepred_to_refflat(parts):
    """Convert genePred fields into refFlat fields.

    Extended genePred output carries the gene name in column 12, otherwise
    the transcript name doubles as gene name.
    """
    gene_name = parts[11] if len(parts) > 11 and parts[11] else parts[0]
    return [gene_name] + parts[:10]
