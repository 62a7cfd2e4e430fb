from datetime import datetime
import errno
from glob import glob
import logging
import os
import time
from typing import Any, Dict, List, Optional

from braceexpand import braceexpand
import pandas as pd

from .constants import (
    COLUMNS,
    COMPLETE_STAMP,
    INTEGER_COLUMNS,
    PROGNAME,
    REQUIRED_COLUMNS,
    JunctureNamespace,
    sort_columns,
)
from .error import InvalidJunctionError
from .junction import Junction, Mate


class Log:
    """
    wrapper around the builtin logging to make it more readable
    """
    def __init__(self, indent_str='  ', indent_level=0, level=logging.INFO):
        self.indent_str = indent_str
        self.indent_level = indent_level
        self.level = level

    def __call__(self, *pos, time_stamp=False, level=None, indent_level=0, **kwargs):
        if self.level is None:
            return
        elif level is None:
            level = self.level

        stamp = datetime.now().strftime('[%Y-%m-%d %H:%M:%S]') if time_stamp else ' ' * 21
        indent_prefix = self.indent_str * (self.indent_level + indent_level)
        message = '{} {}{}'.format(stamp, indent_prefix, ' '.join([str(p) for p in pos]))
        logging.log(level, message, **kwargs)

    def indent(self):
        return Log(self.indent_str, self.indent_level + 1, self.level)

    def __enter__(self):
        return self

    def __exit__(self, *pos):
        pass


LOG = Log()
DEVNULL = Log(level=None)


class WeakJunctureNamespace(JunctureNamespace):
    """
    namespace of option defaults. Setting the environment variable JUNCTURE_<NAME> replaces the value of
    a member, the variable is cast with the type of the member

    Example:
        >>> DEFAULTS.clustering_cutoff  # with JUNCTURE_CLUSTERING_CUTOFF=10
        10.0
    """

    def get_env_name(self, attr):
        return '{}_{}'.format(PROGNAME, attr).upper()

    def __getitem__(self, attr):
        value = super().__getitem__(attr)
        env_value = os.environ.get(self.get_env_name(attr))
        if env_value is None:
            return value
        return self.type(attr)(env_value.strip())


class NullableType:
    def __init__(self, callback_func):
        self.callback_func = callback_func

    def __call__(self, item):
        if str(item).lower() == 'none':
            return None
        return self.callback_func(item)


def bash_expands(*expressions):
    """
    expand a file glob expression, allowing bash-style brackets.

    Returns:
        list: a list of files

    Example:
        >>> bash_expands('./{test,doc}/*py')
        [...]
    """
    result = []
    for expression in expressions:
        eresult = []
        for name in braceexpand(expression):
            for fname in glob(name):
                eresult.append(fname)
        if not eresult:
            raise FileNotFoundError('The expression does not match any files', expression)
        result.extend(eresult)
    return [os.path.abspath(f) for f in result]


def log_arguments(args):
    """
    output the arguments to the console

    Args:
        args (JunctureNamespace): the namespace to print arguments for
    """
    LOG('arguments', time_stamp=True)
    with LOG.indent() as log:
        for arg, val in sorted(args.items()):
            if isinstance(val, list):
                if len(val) <= 1:
                    log(arg, '= {}'.format(val))
                    continue
                log(arg, '= [')
                for v in val:
                    log(repr(v), indent_level=1)
                log(']')
            elif any([isinstance(val, typ) for typ in [str, int, float, bool, tuple]]) or val is None:
                log(arg, '=', repr(val))
            else:
                log(arg, '=', object.__repr__(val))


def mkdirp(dirname):
    """
    Make a directory or path of directories. Does not raise an error when the directory already exists
    """
    LOG("creating output directory: '{}'".format(dirname))
    try:
        os.makedirs(dirname)
    except OSError as exc:
        if exc.errno == errno.EEXIST and os.path.isdir(dirname):
            pass
        else:
            raise exc
    return dirname


def format_duration(duration):
    """
    Example:
        >>> format_duration(3725)
        '1:02:05'
    """
    hours = duration - duration % 3600
    minutes = duration - hours - (duration - hours) % 60
    seconds = duration - hours - minutes
    return '{}:{:02d}:{:02d}'.format(hours // 3600, minutes // 60, seconds)


def generate_complete_stamp(output_dir, log=DEVNULL, start_time=None):
    """
    writes a complete stamp, optionally including the run time if start_time is given

    Args:
        output_dir (str): path to the output dir the stamp should be written in
        log (function): function to print logging messages to
        start_time (int): the start time

    Return:
        str: path to the complete stamp

    Example:
        >>> generate_complete_stamp('some_output_dir')
        'some_output_dir/JUNCTURE.COMPLETE'
    """
    stamp = os.path.join(output_dir, COMPLETE_STAMP)
    log('complete:', stamp)
    with open(stamp, 'w') as fh:
        if start_time is not None:
            duration = int(time.time()) - start_time
            fh.write('run time (hh/mm/ss): {}\n'.format(format_duration(duration)))
            fh.write('run time (s): {}\n'.format(duration))
    return stamp


def read_junctions_from_input_file(
    filename: str,
    add_default: Optional[Dict[str, Any]] = None,
) -> List[Junction]:
    """
    reads a tab-delimited junction table. Each row is converted to a junction

    Args:
        filename: path to the input file
        add_default: default values for optional columns which are missing or empty

    Returns:
        a list of junctions in the order they were read

    Raises:
        InvalidJunctionError: a required column is missing or a row cannot form a valid junction
    """
    add_default = {} if add_default is None else add_default
    try:
        df = pd.read_csv(
            filename,
            dtype={
                **{col: pd.Int64Dtype() for col in INTEGER_COLUMNS},
                **{col: str for col in COLUMNS.values() if col not in INTEGER_COLUMNS},
            },
            sep='\t',
            comment='#',
            keep_default_na=False,
            na_values={col: [''] for col in INTEGER_COLUMNS},
        )
    except pd.errors.EmptyDataError:
        return []

    for col in sorted(REQUIRED_COLUMNS):
        if col not in df:
            raise InvalidJunctionError('missing required column: {}'.format(col), filename)

    for col, default_value in [(COLUMNS.inserted_sequence, ''), (COLUMNS.read_name, '')]:
        default_value = add_default.get(col, default_value)
        if col in df:
            df[col] = df[col].replace({'None': default_value, 'none': default_value, '': default_value})
        else:
            df[col] = default_value

    for col in [COLUMNS.mate1_position, COLUMNS.mate2_position]:
        if df[col].isna().any():
            raise InvalidJunctionError('missing value in required column: {}'.format(col), filename)

    junctions = []
    for _, row in df.iterrows():
        junctions.append(Junction(
            Mate(row[COLUMNS.mate1_seq_name], row[COLUMNS.mate1_orientation], row[COLUMNS.mate1_position]),
            Mate(row[COLUMNS.mate2_seq_name], row[COLUMNS.mate2_orientation], row[COLUMNS.mate2_position]),
            inserted_sequence=row[COLUMNS.inserted_sequence],
            read_name=row[COLUMNS.read_name],
        ))
    return junctions


def read_inputs(inputs, log=DEVNULL, **kwargs):
    """
    read all junctions from a list of input file paths or glob expressions
    """
    junctions = []
    for finput in bash_expands(*inputs):
        log('loading:', finput)
        current = read_junctions_from_input_file(finput, **kwargs)
        if not current:
            log('ignoring empty file:', finput)
        junctions.extend(current)
    log('loaded', len(junctions), 'junctions')
    return junctions


def output_tabbed_file(rows, filename, header=None):
    if header is None:
        custom_header = False
        header = set()
    else:
        custom_header = True
    flat_rows = []
    for row in rows:
        if not isinstance(row, dict):
            row = row.flatten()
        flat_rows.append(row)
        if not custom_header:
            header.update(row.keys())
    header = sort_columns(header)
    LOG('writing:', filename)
    df = pd.DataFrame.from_records(flat_rows, columns=header)
    df = df.fillna('None')
    df.to_csv(filename, columns=header, index=False, sep='\t')
