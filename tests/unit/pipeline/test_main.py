import os

import pytest

from picardqc.pipeline import main
from picardqc.pipeline.config_utils import ToolchainConfig
from tests.unit import data


def test_parse_collate():
    kwargs = main.parse_cl_args(["collate", "out/run", "reports"])
    assert kwargs["collate"] is True
    assert kwargs["config_file"] is None
    assert kwargs["args"].prefix == "out/run"
    assert kwargs["args"].directory == "reports"


def test_parse_collate_rejects_extra_flags():
    with pytest.raises(SystemExit):
        main.parse_cl_args(["collate", "out/run", "reports", "-c", "picardqc.yaml"])


def test_parse_metrics():
    kwargs = main.parse_cl_args(["metrics", "s1.bam", "qc", "-r", "hg38.fa", "--refflat",
                                 "genes.refFlat", "-c", "picardqc.yaml"])
    assert kwargs["metrics"] is True
    assert kwargs["config_file"] == "picardqc.yaml"
    assert kwargs["args"].ref_file == "hg38.fa"
    assert kwargs["args"].refflat == "genes.refFlat"
    assert kwargs["args"].ribosomal_intervals is None
    assert kwargs["args"].sample is None


def test_parse_requires_subcommand():
    with pytest.raises(SystemExit):
        main.parse_cl_args([])


def test_collate(tmpdir):
    reports = tmpdir.mkdir("reports")
    data.write_samples(reports, ["s1", "s2"])
    prefix = str(tmpdir.join("out", "run"))
    main.main(["collate", prefix, str(reports)])
    assert os.path.exists(prefix + "-all-metrics.tsv")
    assert not os.path.exists(prefix + "-alignment.tsv")
    assert os.listdir(str(tmpdir.join("out"))) == ["run-all-metrics.tsv"]


def test_collate_missing_primary_exits(tmpdir, capsys):
    reports = tmpdir.mkdir("reports")
    data.write_samples(reports, ["s1"], ["duplication"])
    prefix = str(tmpdir.join("run"))
    with pytest.raises(SystemExit) as excinfo:
        main.main(["collate", prefix, str(reports)])
    assert excinfo.value.code == 1
    assert not os.path.exists(prefix + "-all-metrics.tsv")
    assert "No alignment metrics" in capsys.readouterr().err


def test_version(capsys):
    main.main(["version"])
    assert capsys.readouterr().out.strip() == main.version.__version__


def test_metrics(tmpdir, mocker):
    config_file = tmpdir.join("picardqc.yaml")
    config_file.write("resources:\n  nice: 5\n")
    toolchain = ToolchainConfig("picard", (), 5, "hg38.fa", None, None, None)
    mock_toolchain = mocker.patch("picardqc.pipeline.main.config_utils.toolchain_config",
                                  return_value=toolchain)
    mock_run = mocker.patch("picardqc.pipeline.main.picard_qc.run")
    main.main(["metrics", "s1.bam", str(tmpdir.join("qc")), "-r", "hg38.fa", "--sample", "S1",
               "-c", str(config_file)])
    config, ref_file, refflat, ribo = mock_toolchain.call_args[0]
    assert config["resources"]["nice"] == 5
    assert ref_file == os.path.abspath("hg38.fa")
    assert refflat is None and ribo is None
    mock_run.assert_called_once_with("s1.bam", toolchain, str(tmpdir.join("qc")), "S1")
