"""Work with Broad's Picard metrics collection tools from Python.
"""
from picardqc.broad import picardrun
from picardqc.provenance import do

def get_default_jvm_opts(tmp_dir=None):
    """Retrieve default JVM tuning options

    Avoids issues with multiple spun up Java processes running into out of memory errors.
    Parallel GC can use a lot of cores on big machines and primarily helps reduce task latency
    and responsiveness which are not needed for batch jobs.
    """
    opts = ["-XX:+UseSerialGC"]
    if tmp_dir:
        opts.append("-Djava.io.tmpdir=%s" % tmp_dir)
    return opts

class PicardCmdRunner:
    """Run Picard sub-commands through the `picard` wrapper script.
    """
    def __init__(self, toolchain):
        self._cmd = toolchain.picard
        self._toolchain = toolchain

    @property
    def toolchain(self):
        return self._toolchain

    def cmdline(self, subcmd, opts, tmp_dir=None):
        cmd = []
        if self._toolchain.nice is not None:
            cmd += ["nice", "-n", str(self._toolchain.nice)]
        cmd += [self._cmd] + list(self._toolchain.jvm_opts) + get_default_jvm_opts(tmp_dir)
        cmd += [subcmd] + ["%s=%s" % (x, y) for x, y in opts] + ["VALIDATION_STRINGENCY=SILENT"]
        return cmd

    def run(self, subcmd, opts, tmp_dir=None):
        do.run(self.cmdline(subcmd, opts, tmp_dir), "Picard: %s" % subcmd)

    def run_fn(self, name, *args, **kwds):
        """Run pre-built functionality that used Broad tools by name.

        See the picardrun module for available functions.
        """
        fn = getattr(picardrun, name, None)
        assert fn is not None, "Could not find function %s in %s" % (name, picardrun)
        return fn(self, *args, **kwds)
