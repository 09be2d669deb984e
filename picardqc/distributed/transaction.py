"""Handle file based transactions allowing safe restarts at any point.

To handle interrupts, this defines output files written to temporary
locations during processing and copied to the final location when finished.
This ensures output tables will be complete independent of method of
interruption.
"""
import contextlib
import os
import shutil
import tempfile

import toolz as tz

from picardqc import utils


DEFAULT_TMP = 'picardqctx'


@contextlib.contextmanager
def tx_tmpdir(data=None, base_dir=None):
    """Context manager to create and remove a transactional temporary directory.

    Uses either a configured temporary directory or a `picardqctx`
    directory inside the current (or supplied base) directory.
    """
    base_dir = base_dir or os.getcwd()
    tmpdir_base = utils.get_abspath(_get_base_tmpdir(data, base_dir))
    utils.safe_makedir(tmpdir_base)
    tmp_dir = tempfile.mkdtemp(dir=tmpdir_base)
    try:
        yield tmp_dir
    finally:
        utils.remove_safe(tmp_dir)
        if os.path.basename(tmpdir_base) == DEFAULT_TMP and not os.listdir(tmpdir_base):
            utils.remove_safe(tmpdir_base)


def _get_base_tmpdir(data, fallback_base_dir):
    config_tmpdir = tz.get_in(("resources", "tmp", "dir"), data)
    return config_tmpdir or os.path.join(fallback_base_dir, DEFAULT_TMP)


@contextlib.contextmanager
def file_transaction(*data_and_files):
    """Wrap file generation in a transaction, moving to output if finishes.

    The initial argument can be a configuration dictionary, used to
    identify global settings for temporary directories.
    """
    with _flatten_plus_safe(data_and_files) as (safe_names, orig_names):
        for safe in safe_names:
            utils.remove_safe(safe)
        if len(safe_names) == 1:
            yield safe_names[0]
        else:
            yield tuple(safe_names)

        for safe, orig in zip(safe_names, orig_names):
            if os.path.exists(safe):
                _move_tmp_file(safe, orig)


def _move_tmp_file(safe, orig):
    utils.safe_makedir(os.path.dirname(orig))
    want_size = utils.get_size(safe)
    shutil.move(safe, orig)
    transfer_size = utils.get_size(orig)
    assert want_size == transfer_size, (
        'distributed.transaction.file_transaction: File copy error: '
        'file on temporary storage ({}) size {} bytes does not equal size '
        'of file after transfer ({}) size {} bytes'.format(
            safe, want_size, orig, transfer_size))


@contextlib.contextmanager
def _flatten_plus_safe(data_and_files):
    """Flatten names of files and create temporary file names.
    """
    data, rollback_files = _normalize_args(data_and_files)
    base_dir = os.path.dirname(os.path.abspath(rollback_files[0])) if rollback_files else None
    with tx_tmpdir(data, base_dir) as tmpdir:
        tx_files = [os.path.join(tmpdir, os.path.basename(f))
                    for f in rollback_files]
        yield tx_files, rollback_files


def _normalize_args(data_and_files):
    data, files = _get_args(data_and_files)
    rollback_files = [f for f in _flatten(files) if f]
    return (data, rollback_files)


def _get_args(data_and_files):
    if isinstance(data_and_files[0], dict):
        return data_and_files[0], data_and_files[1:]
    return None, data_and_files


def _flatten(iterable):
    for elem in iterable:
        if isinstance(elem, (tuple, list)):
            for i in elem:
                yield i
        else:
            yield elem
