"""Registry of Picard metric families collated into the master table.

Each family describes where its reports live (file suffix), which section to
pull out of them and how that section joins onto the alignment metrics. The
order of `FAMILIES` is the order families are merged into the master table.
"""
import collections

from picardqc.qc.sections import SUMMARY, HISTOGRAM

METRICS_MARKER = "## METRICS CLASS"
HISTOGRAM_MARKER = "## HISTOGRAM"

# Read group accumulation columns Picard appends to metric rows. SAMPLE is
# the master table key, so these never come through from a section.
ACCUMULATION_COLUMNS = ("SAMPLE", "LIBRARY", "READ_GROUP")

Family = collections.namedtuple("Family", ["name", "suffix", "marker", "mode", "columns",
                                           "optional", "joined", "exclude"])

# designator column, values to drop
Exclude = collections.namedtuple("Exclude", ["column", "values"])

PRIMARY = "alignment"

FAMILIES = (
    Family("alignment", ".alignment_summary_metrics", METRICS_MARKER, HISTOGRAM, None,
           False, True, Exclude("CATEGORY", ("FIRST_OF_PAIR", "SECOND_OF_PAIR"))),
    Family("rnaseq", ".rna_metrics", METRICS_MARKER, SUMMARY, None, True, True, None),
    Family("duplication", ".duplication_metrics", METRICS_MARKER, SUMMARY, None, True, True, None),
    Family("gcbias", ".gc_bias.summary_metrics", METRICS_MARKER, SUMMARY, None, True, True, None),
    Family("insertsize", ".insert_size_metrics", METRICS_MARKER, SUMMARY, 9, True, True, None),
    Family("libcomplexity", ".library_complexity_metrics", METRICS_MARKER, SUMMARY, None,
           True, True, None),
    Family("mapq", ".mapq_metrics", METRICS_MARKER, SUMMARY, None, True, True, None),
    Family("qualityscore", ".quality_distribution_metrics", HISTOGRAM_MARKER, HISTOGRAM, None,
           True, False, None),
)

def get_family(name, families=FAMILIES):
    for family in families:
        if family.name == name:
            return family
    raise ValueError("Unknown metric family %s. Available: %s" %
                     (name, ", ".join(f.name for f in families)))

def families_from_config(config):
    """Apply per-family overrides from a configuration dictionary.

    Only the column limit is configurable:

      families:
        insertsize:
          columns: 10
    """
    overrides = config.get("families") or {}
    for name in overrides:
        get_family(name)
    out = []
    for family in FAMILIES:
        cur = overrides.get(family.name) or {}
        if "columns" in cur:
            family = family._replace(columns=int(cur["columns"]) if cur["columns"] else None)
        out.append(family)
    return tuple(out)
