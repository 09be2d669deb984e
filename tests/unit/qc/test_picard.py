import os

import pytest

from picardqc.pipeline.config_utils import ToolchainConfig
from picardqc.qc import picard


@pytest.fixture
def mock_tools(mocker):
    run_fn = mocker.patch("picardqc.qc.picard.broad.PicardCmdRunner.run_fn",
                          side_effect=lambda name, bam_file, *args: [x for x in args
                                                                     if str(x).startswith("/")][-1])
    mapq = mocker.patch("picardqc.qc.picard.mapq.mapq_metrics", side_effect=lambda bam, out, config: out)
    mocker.patch("picardqc.qc.picard.bam.sample_name", return_value="NA12878")
    yield run_fn, mapq


def _toolchain(refflat=None):
    return ToolchainConfig("picard", (), None, "/ref/hg38.fa", refflat, None, None)


def test_get_sample(mocker):
    mocker.patch("picardqc.qc.picard.bam.sample_name", return_value=None)
    assert picard.get_sample("/data/s1-ready.bam") == "s1-ready"
    assert picard.get_sample("/data/s1-ready.bam", "s1") == "s1"


def test_run_all_families(tmpdir, mocker, mock_tools):
    run_fn, mapq = mock_tools
    mocker.patch("picardqc.qc.picard.bam.is_paired", return_value=True)
    out_dir = str(tmpdir.join("qc"))
    out = picard.run("/data/s1.bam", _toolchain("/ref/genes.refFlat"), out_dir)
    assert list(out.keys()) == ["alignment", "rnaseq", "duplication", "gcbias", "insertsize",
                                "libcomplexity", "mapq", "qualityscore"]
    assert out["alignment"] == os.path.join(out_dir, "NA12878.alignment_summary_metrics")
    assert out["gcbias"] == os.path.join(out_dir, "NA12878.gc_bias.summary_metrics")
    assert out["mapq"] == os.path.join(out_dir, "NA12878.mapq_metrics")
    assert os.path.isdir(out_dir)
    names = [c[0][0] for c in run_fn.call_args_list]
    assert "picard_rnaseq_metrics" in names
    mapq.assert_called_once_with("/data/s1.bam", out["mapq"], {})


def test_run_single_end_without_annotation(tmpdir, mocker, mock_tools):
    mocker.patch("picardqc.qc.picard.bam.is_paired", return_value=False)
    out = picard.run("/data/s1.bam", _toolchain(), str(tmpdir), "S1")
    assert "rnaseq" not in out
    assert "insertsize" not in out
    assert out["duplication"] == str(tmpdir.join("S1.duplication_metrics"))
