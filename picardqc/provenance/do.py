"""Run external tools, logging command lines and keeping the tail of their output.
"""
import collections
import subprocess

from picardqc import utils
from picardqc.log import logger, logger_cl

# lines of tool output kept for error reports
OUTPUT_TAIL = 100


def run(cmd, descr=None, checks=None):
    """Run a command given as a list of arguments, raising on failure.

    checks are callables run after a zero exit status; any returning False
    marks the command as failed.
    """
    cmd = [str(x) for x in cmd]
    if descr:
        logger.debug(descr)
    logger_cl.debug(" ".join(cmd))
    try:
        _do_run(cmd, checks)
    except Exception:
        logger.exception("External command failed: %s" % (descr or cmd[0]))
        raise

def _do_run(cmd, checks):
    proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, close_fds=True)
    tail = collections.deque(maxlen=OUTPUT_TAIL)
    with proc.stdout:
        for line in proc.stdout:
            line = line.decode("utf-8", errors="replace")
            tail.append(line)
            if line.rstrip():
                logger.debug(line.rstrip())
    exitcode = proc.wait()
    if exitcode != 0:
        raise subprocess.CalledProcessError(exitcode, " ".join(cmd) + "\n" + "".join(tail))
    for check in checks or []:
        if not check():
            raise IOError("Output check failed for %s" % cmd[0])

def file_nonempty(target_file):
    def check():
        ok = utils.file_exists(target_file)
        if not ok:
            logger.info("Did not find non-empty output file %s" % target_file)
        return ok
    return check
