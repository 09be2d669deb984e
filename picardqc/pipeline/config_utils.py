"""Loads configurations from .yaml files and expands environment variables.

The loaded dictionary is converted once into immutable configuration values
which are passed explicitly into collation and toolchain runs.
"""
import collections
import os
import sys

import toolz as tz
import yaml


class CmdNotFound(Exception):
    pass

CollateConfig = collections.namedtuple("CollateConfig", ["prefix", "directory", "families"])

ToolchainConfig = collections.namedtuple("ToolchainConfig",
                                         ["picard", "jvm_opts", "nice", "ref_file", "refflat",
                                          "ribosomal_intervals", "tmp_dir"])

DEFAULT_JVM_OPTS = ("-Xms750m", "-Xmx4g")

# ## Retrieval functions

def load_config(config_file):
    """Load YAML config file, replacing environmental variables.
    """
    with open(config_file) as in_handle:
        config = yaml.safe_load(in_handle) or {}
    config = _expand_paths(config)
    if 'resources' not in config:
        config['resources'] = {}
    return config

def _expand_paths(config):
    for field, setting in config.items():
        if isinstance(config[field], dict):
            config[field] = _expand_paths(config[field])
        else:
            config[field] = expand_path(setting)
    return config

def expand_path(path):
    """ Combines os.path.expandvars with replacing ~ with $HOME.
    """
    try:
        return os.path.expandvars(path.replace("~", "$HOME"))
    except AttributeError:
        return path

def get_resources(name, config):
    """Retrieve resources for a program, pulling from multiple config sources.
    """
    return tz.get_in(["resources", name], config,
                     tz.get_in(["resources", "default"], config, {}))

def get_program(name, config, default=None):
    """Retrieve the command line for a program from the configuration.

    Resource entries can be either a plain string, taken as the command,
    or a dictionary with a `cmd` key.
    """
    pconfig = tz.get_in(["resources", name], config)
    return _get_program_cmd(name, pconfig, default)

def _get_check_program_cmd(fn):
    def wrap(name, pconfig, default):
        is_ok = lambda f: os.path.isfile(f) and os.access(f, os.X_OK)
        # support conda installed programs next to the running interpreter
        if is_ok(os.path.join(os.path.dirname(sys.executable), name)):
            return os.path.join(os.path.dirname(sys.executable), name)
        program = expand_path(fn(name, pconfig, default))
        if is_ok(program):
            return program
        for adir in os.environ.get('PATH', "").split(":"):
            if adir and is_ok(os.path.join(adir, program)):
                return os.path.join(adir, program)
        raise CmdNotFound(" ".join(map(repr, (fn.__name__, name, pconfig, default))))
    return wrap

@_get_check_program_cmd
def _get_program_cmd(name, pconfig, default):
    """Retrieve commandline of a program.
    """
    if pconfig is None:
        return default or name
    elif isinstance(pconfig, str):
        return pconfig
    elif "cmd" in pconfig:
        return pconfig["cmd"]
    elif default is not None:
        return default
    else:
        return name

# ## Immutable run configuration

def collate_config(prefix, directory, config=None):
    """Build the configuration for one collation run.
    """
    from picardqc.qc import families
    if config is None: config = {}
    return CollateConfig(prefix, directory, families.families_from_config(config))

def toolchain_config(config, ref_file, refflat=None, ribosomal_intervals=None):
    """Build the configuration for running the Picard toolchain over a BAM file.

    Checking the Picard command happens here, once, so a missing install
    fails before any work starts.
    """
    resources = get_resources("picard", config)
    if not isinstance(resources, dict):
        resources = {}
    nice = tz.get_in(["resources", "nice"], config)
    return ToolchainConfig(picard=get_program("picard", config),
                           jvm_opts=tuple(resources.get("jvm_opts", DEFAULT_JVM_OPTS)),
                           nice=int(nice) if nice is not None else None,
                           ref_file=ref_file,
                           refflat=refflat,
                           ribosomal_intervals=ribosomal_intervals,
                           tmp_dir=tz.get_in(["resources", "tmp", "dir"], config))
