import os

import pytest

from picardqc import utils


@pytest.mark.parametrize(("fname", "expected"), [
    ("s1.bam", ("s1", ".bam")),
    ("genes.gtf.gz", ("genes", ".gtf.gz")),
    ("/path/s1.alignment_summary_metrics", ("/path/s1", ".alignment_summary_metrics")),
])
def test_splitext_plus(fname, expected):
    assert utils.splitext_plus(fname) == expected


def test_file_exists(tmpdir):
    empty = tmpdir.join("empty.tsv")
    empty.write("")
    full = tmpdir.join("full.tsv")
    full.write("SAMPLE\n")
    assert not utils.file_exists(str(empty))
    assert utils.file_exists(str(full))
    assert not utils.file_exists(str(tmpdir.join("missing.tsv")))
    assert not utils.file_exists(None)


def test_locate_recursive(tmpdir):
    tmpdir.join("s1.rna_metrics").write("x")
    tmpdir.mkdir("a").mkdir("b").join("s2.rna_metrics").write("x")
    tmpdir.join("s1.rna_metrics.pdf").write("x")
    found = sorted(os.path.basename(x) for x in utils.locate("*.rna_metrics", str(tmpdir)))
    assert found == ["s1.rna_metrics", "s2.rna_metrics"]


def test_remove_safe(tmpdir):
    sub = tmpdir.mkdir("sub")
    sub.join("f.txt").write("x")
    utils.remove_safe(str(sub))
    utils.remove_safe(str(sub))
    assert not sub.exists()


def test_get_size(tmpdir):
    sub = tmpdir.mkdir("sub")
    sub.join("a").write("12345")
    sub.join("b").write("123")
    assert utils.get_size(str(sub.join("a"))) == 5
    assert utils.get_size(str(sub)) == 8
